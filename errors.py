"""Error types raised by the extraction and export pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class DashboardError(Exception):
    """Base class for every error the boundary layer flattens into a message."""


class EngineInitError(DashboardError):
    """The embedded database engine could not be initialized."""


class EngineNotInitializedError(DashboardError):
    """An engine operation was attempted before ``ensure_ready`` succeeded."""

    def __init__(self, message: str = "Database engine is not initialized.") -> None:
        super().__init__(message)


class FileReadError(DashboardError):

    def __init__(self, file_path: Path, reason: str) -> None:
        super().__init__(f"Failed to read file {str(file_path)!r}: {reason}")
        self.file_path = file_path
        self.reason = reason


class ExtractionError(DashboardError):
    """Opening, parsing or querying a database file failed."""

    def __init__(self, file_path: Path, reason: str) -> None:
        super().__init__(f"Failed to process database file: {reason}")
        self.file_path = file_path
        self.reason = reason


class NoDataError(DashboardError):

    def __init__(self, message: str = "No data provided for export.") -> None:
        super().__init__(message)


class CsvWriteError(DashboardError):

    def __init__(self, destination: Optional[Path], reason: str) -> None:
        super().__init__(f"Failed to save CSV file: {reason}")
        self.destination = destination
        self.reason = reason
