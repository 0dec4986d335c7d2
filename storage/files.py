from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from errors import CsvWriteError, FileReadError

logger = logging.getLogger(__name__)


class LocalFileStore:
    """Reads database images from, and writes export documents to, local disk."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read_bytes(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FileReadError(path, exc.strerror or str(exc)) from exc

    def write_text(self, path: Path, text: str) -> None:
        try:
            with path.open("w", encoding=self.encoding, newline="") as handle:
                handle.write(text)
        except OSError as exc:
            raise CsvWriteError(path, exc.strerror or str(exc)) from exc
        logger.info("Wrote %d characters", len(text), extra={"destination": str(path)})


@lru_cache
def build_default_store() -> LocalFileStore:
    return LocalFileStore()
