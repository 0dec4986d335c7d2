"""Loads the log table of a database file into memory."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from engine.base import EngineError, scoped_database
from engine.loader import EngineLoader, build_default_loader
from errors import ExtractionError
from models.records import LOG_COLUMNS, LOG_TABLE, LogRecordSet
from storage.files import LocalFileStore, build_default_store

logger = logging.getLogger(__name__)

LOG_QUERY = f"SELECT {', '.join(LOG_COLUMNS)} FROM {LOG_TABLE} ORDER BY sl DESC"


class LogExtractor:
    """Opens a database file in a scoped engine instance and reads ``temp_logs``."""

    def __init__(self, loader: EngineLoader, store: LocalFileStore) -> None:
        self.loader = loader
        self.store = store

    def extract_log(self, file_path: Path) -> LogRecordSet:
        engine = self.loader.engine
        data = self.store.read_bytes(file_path)

        try:
            with scoped_database(engine, data) as handle:
                result = engine.query(handle, LOG_QUERY)
        except EngineError as exc:
            logger.warning(
                "Database query failed",
                extra={"file_path": str(file_path), "reason": str(exc)},
            )
            raise ExtractionError(file_path, str(exc)) from exc

        if result is None or not result.rows:
            logger.info("Log table is empty", extra={"file_path": str(file_path), "row_count": 0})
            return []

        columns = result.columns
        records = [dict(zip(columns, row)) for row in result.rows]
        logger.info(
            "Loaded log table",
            extra={"file_path": str(file_path), "row_count": len(records)},
        )
        return records


@lru_cache
def build_default_extractor() -> LogExtractor:
    """Factory that wires the extractor to the process-wide engine loader."""
    return LogExtractor(loader=build_default_loader(), store=build_default_store())
