from __future__ import annotations

from typing import Any, Dict, List

import typer

from services.exporter import header_label


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def render_records(payload: Dict[str, Any]) -> None:
    echo_heading(f"Log entries from {payload.get('file_name')}")
    records: List[Dict[str, Any]] = payload.get("data") or []
    if not records:
        typer.echo("No log entries found.")
        return

    columns = list(records[0].keys())
    table = [[header_label(name) for name in columns]]
    table.extend([_cell(record.get(name)) for name in columns] for record in records)
    widths = [max(len(row[index]) for row in table) for index in range(len(columns))]

    for position, row in enumerate(table):
        typer.echo("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
        if position == 0:
            typer.echo("  ".join("-" * width for width in widths))
    typer.echo()
    typer.echo(f"{len(records)} entries")


def render_outcome(payload: Dict[str, Any]) -> None:
    """Print a failed or canceled envelope and exit accordingly."""
    if payload.get("canceled"):
        typer.echo(payload.get("message") or "Canceled")
        raise typer.Exit(code=0)
    typer.secho(payload.get("message") or "Operation failed.", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)
