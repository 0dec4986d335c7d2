from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

import pytest

from engine.loader import EngineLoader
from settings import PACKAGED_RESOURCES_DIR

LogRow = Sequence[object]

_CREATE_TABLE = """
CREATE TABLE temp_logs (
    sl INTEGER PRIMARY KEY,
    sensor_name TEXT,
    status TEXT,
    temperature REAL,
    timestamp TEXT
)
"""


@pytest.fixture()
def make_log_db(tmp_path: Path) -> Callable[..., Path]:
    """Build a SQLite file holding a ``temp_logs`` table with the given rows."""

    def factory(
        rows: Iterable[LogRow] = (),
        name: str = "logs.db",
        journal_mode: Optional[str] = None,
    ) -> Path:
        path = tmp_path / name
        connection = sqlite3.connect(path)
        try:
            if journal_mode is not None:
                connection.execute(f"PRAGMA journal_mode={journal_mode}")
            connection.execute(_CREATE_TABLE)
            connection.executemany(
                "INSERT INTO temp_logs (sl, sensor_name, status, temperature, timestamp) "
                "VALUES (?, ?, ?, ?, ?)",
                list(rows),
            )
            connection.commit()
        finally:
            connection.close()
        return path

    return factory


@pytest.fixture()
def ready_loader() -> EngineLoader:
    loader = EngineLoader(resource_path=PACKAGED_RESOURCES_DIR / "engine_init.sql")
    loader.ensure_ready()
    return loader
