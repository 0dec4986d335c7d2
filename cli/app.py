from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_outcome, render_records


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for viewing and exporting sensor temperature logs.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Dashboard API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, request_timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("load")
def load_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to a .db log backup."),
) -> None:
    """Load a log backup and print its entries."""
    state = _get_state(ctx)
    payload = state.client.load_log(file)
    if not payload.get("success"):
        render_outcome(payload)
    render_records(payload)


@app.command("export")
def export_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to a .db log backup."),
    out: Path = typer.Option(
        Path("."),
        "--out",
        "-o",
        help="Destination CSV file, or a directory to receive the default export name.",
    ),
) -> None:
    """Load a log backup and save it as CSV."""
    state = _get_state(ctx)
    loaded = state.client.load_log(file)
    if not loaded.get("success"):
        render_outcome(loaded)

    typer.echo(f"Loaded {len(loaded.get('data') or [])} entries from {loaded.get('file_name')}.")
    exported = state.client.export_csv(loaded.get("data") or [], out)
    if not exported.get("success"):
        render_outcome(exported)
    typer.secho(exported.get("message") or "Export complete.", fg=typer.colors.GREEN)


@app.command("backup-path")
def backup_path_command(ctx: typer.Context) -> None:
    """Print the default directory for log backups."""
    state = _get_state(ctx)
    typer.echo(state.client.backup_path())
