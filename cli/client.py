from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the dashboard service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.request_timeout)

    def close(self) -> None:
        self._client.close()

    def load_log(self, path: Path) -> Dict[str, Any]:
        return self._post("/logs/load", {"file_path": str(path.resolve())})

    def export_csv(
        self, records: List[Dict[str, Any]], destination: Optional[Path]
    ) -> Dict[str, Any]:
        payload = {
            "records": records,
            "destination": str(destination.resolve()) if destination is not None else None,
        }
        return self._post("/logs/export", payload)

    def backup_path(self) -> str:
        try:
            response = self._client.get("/backup-path")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        path = response.json().get("path")
        if not isinstance(path, str):
            raise typer.BadParameter("Unexpected response payload when fetching backup path.")
        return path

    def _post(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._client.post(url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except ValueError:
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
