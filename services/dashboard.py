"""Boundary between the user-facing surfaces and the extraction pipeline.

Every operation here returns an :class:`OperationResult`. Errors raised by the
core are caught and flattened into ``message``; a dismissed file dialog is
reported as ``canceled`` rather than as a failure.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence

from app.schemas import OperationResult
from errors import DashboardError
from services.exporter import CsvExporter
from services.extractor import LogExtractor, build_default_extractor
from services.pickers import CSV_FILTER, DATABASE_FILTER, FilePicker
from settings import get_settings
from storage.files import LocalFileStore, build_default_store

logger = logging.getLogger(__name__)

CANCELED_MESSAGE = "Canceled"
BACKUPS_DIRNAME = "backups"


def get_default_backup_directory(app_data_root: Optional[Path] = None) -> Path:
    """Directory suggested to the user for log backups. Never created here."""
    root = app_data_root if app_data_root is not None else get_settings().app_data_root
    return root / BACKUPS_DIRNAME


def default_export_filename(now: Optional[datetime] = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return f"log_data_export_{moment.strftime('%Y%m%d')}.csv"


def _canceled() -> OperationResult:
    return OperationResult(success=False, canceled=True, message=CANCELED_MESSAGE)


class DashboardService:
    """Coordinates file selection, extraction, rendering and persistence."""

    def __init__(
        self,
        extractor: LogExtractor,
        exporter: CsvExporter,
        store: LocalFileStore,
        app_data_root: Path,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.extractor = extractor
        self.exporter = exporter
        self.store = store
        self.app_data_root = app_data_root
        self._clock = clock

    def load_database_log(self, picker: FilePicker) -> OperationResult:
        """Ask for a database file and load its log table."""
        file_path = picker.choose_open(
            "Select Temperature Log Backup File", self.app_data_root, DATABASE_FILTER
        )
        if file_path is None:
            return _canceled()

        try:
            records = self.extractor.extract_log(file_path)
        except DashboardError as exc:
            logger.warning(
                "Failed to load database log",
                extra={"file_path": str(file_path), "reason": str(exc)},
            )
            return OperationResult(success=False, message=str(exc), file_path=str(file_path))

        return OperationResult(
            success=True,
            data=records,
            file_path=str(file_path),
            file_name=file_path.name,
        )

    def export_to_csv(
        self,
        records: Optional[Sequence[Mapping[str, Any]]],
        picker: FilePicker,
    ) -> OperationResult:
        """Render ``records`` as CSV and save it where the user chooses."""
        try:
            document = self.exporter.export_csv(records)
        except DashboardError as exc:
            return OperationResult(success=False, message=str(exc))

        destination = picker.choose_save(
            "Export Log Data to CSV", default_export_filename(self._clock()), CSV_FILTER
        )
        if destination is None:
            return _canceled()

        try:
            self.store.write_text(destination, document)
        except DashboardError as exc:
            logger.error(
                "CSV write failed",
                extra={"destination": str(destination), "reason": str(exc)},
            )
            return OperationResult(success=False, message=str(exc), file_path=str(destination))

        return OperationResult(
            success=True,
            message=f"Data successfully exported to CSV at: {destination}",
            file_path=str(destination),
            file_name=destination.name,
        )

    def get_initial_backup_path(self) -> Path:
        return get_default_backup_directory(self.app_data_root)


@lru_cache
def build_default_dashboard() -> DashboardService:
    """Factory that wires the dashboard with the process-wide collaborators."""
    return DashboardService(
        extractor=build_default_extractor(),
        exporter=CsvExporter(),
        store=build_default_store(),
        app_data_root=get_settings().app_data_root,
    )
