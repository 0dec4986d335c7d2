"""File selection collaborators used by the dashboard boundary."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence


@dataclass(frozen=True)
class FileFilter:
    name: str
    extensions: Sequence[str]


DATABASE_FILTER = FileFilter(name="Database Files", extensions=("db",))
CSV_FILTER = FileFilter(name="CSV File", extensions=("csv",))


class FilePicker(Protocol):
    """Returns the chosen path, or ``None`` when the user cancels."""

    def choose_open(
        self, title: str, default_dir: Path, file_filter: FileFilter
    ) -> Optional[Path]:
        ...

    def choose_save(
        self, title: str, default_name: str, file_filter: FileFilter
    ) -> Optional[Path]:
        ...


class FixedPathPicker:
    """Picker whose answer was decided up front, e.g. by an HTTP request body.

    A directory handed to :meth:`choose_save` receives the suggested filename.
    """

    def __init__(self, path: Optional[Path]) -> None:
        self.path = path

    def choose_open(
        self, title: str, default_dir: Path, file_filter: FileFilter
    ) -> Optional[Path]:
        return self.path

    def choose_save(
        self, title: str, default_name: str, file_filter: FileFilter
    ) -> Optional[Path]:
        if self.path is None:
            return None
        if self.path.is_dir():
            return self.path / default_name
        return self.path
