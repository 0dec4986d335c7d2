"""CSV rendering for log record sets."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from errors import NoDataError

HEADER_LABELS: Dict[str, str] = {
    "sensor_name": "Sensor Name",
    "temperature": "Temperature (C)",
    "timestamp": "Time Stamp",
}


def header_label(field_name: str) -> str:
    """Human-readable column title for a record field."""
    return HEADER_LABELS.get(field_name, field_name.upper())


def format_value(value: Any) -> str:
    """Render one cell.

    Only text containing a comma is quoted. Quotes inside other values and
    embedded newlines are written as-is.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        if "," in value:
            return '"' + value.replace('"', '""') + '"'
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def _format_float(value: float) -> str:
    """Shortest round-trip text, positional between 1e-6 and 1e21, else ``1e+21`` style."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    magnitude = abs(value)
    if magnitude < 1e21 and value.is_integer():
        return str(int(value))
    if 1e-6 <= magnitude < 1e21:
        return format(Decimal(repr(value)), "f")
    mantissa, exponent = repr(value).split("e")
    return f"{mantissa}e{int(exponent):+d}"


class CsvExporter:
    """Turns a record sequence into a CSV document."""

    def infer_fields(self, records: Sequence[Mapping[str, Any]]) -> List[str]:
        """Field order comes from the keys of the first record."""
        return list(records[0].keys())

    def render_header(self, fields: Iterable[str]) -> str:
        return ",".join(header_label(name) for name in fields)

    def render_row(self, record: Mapping[str, Any], fields: Iterable[str]) -> str:
        return ",".join(format_value(record.get(name)) for name in fields)

    def export_csv(self, records: Optional[Sequence[Mapping[str, Any]]]) -> str:
        if not records:
            raise NoDataError()

        fields = self.infer_fields(records)
        lines = [self.render_header(fields)]
        lines.extend(self.render_row(record, fields) for record in records)
        return "\n".join(lines)
