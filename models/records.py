"""Record shapes shared across services."""

from __future__ import annotations

from typing import Any, Dict, List

LOG_TABLE = "temp_logs"

# Column order of the log table as selected by the extractor.
LOG_COLUMNS = ("sl", "sensor_name", "status", "temperature", "timestamp")

# A single row of the log table keyed by column name, in column order.
LogRecord = Dict[str, Any]

# Rows of one extraction, most recent ``sl`` first.
LogRecordSet = List[LogRecord]
