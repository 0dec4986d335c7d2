from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

import pytest

from engine.base import EngineError, QueryResult
from engine.loader import EngineLoader
from engine.sqlite import SQLiteEngine
from errors import EngineNotInitializedError, ExtractionError, FileReadError
from services.extractor import LOG_QUERY, LogExtractor
from storage.files import LocalFileStore


class CountingEngine:
    """Wraps an engine and records every open/close."""

    def __init__(self, inner: Any, fail_query: bool = False) -> None:
        self.inner = inner
        self.fail_query = fail_query
        self.opened: List[Any] = []
        self.closed: List[Any] = []
        self.queries: List[str] = []

    def open(self, data: bytes) -> Any:
        handle = self.inner.open(data)
        self.opened.append(handle)
        return handle

    def query(self, handle: Any, sql: str) -> Optional[QueryResult]:
        self.queries.append(sql)
        if self.fail_query:
            raise EngineError("disk image is malformed")
        return self.inner.query(handle, sql)

    def close(self, handle: Any) -> None:
        self.closed.append(handle)
        self.inner.close(handle)


def _loader_with(engine: Any) -> EngineLoader:
    loader = EngineLoader(resource_path=Path("missing-resource.sql"), factory=lambda _data: engine)
    loader.ensure_ready()
    return loader


def _extractor(loader: EngineLoader) -> LogExtractor:
    return LogExtractor(loader=loader, store=LocalFileStore())


def test_extract_returns_rows_in_descending_sl_order(make_log_db, ready_loader) -> None:
    path = make_log_db(
        [
            (1, "probe-a", "OK", 20.5, "2024-01-01T00:00:00Z"),
            (3, "probe-b", "HIGH", 31.0, "2024-01-01T00:02:00Z"),
            (2, "probe-a", "OK", 21.25, "2024-01-01T00:01:00Z"),
        ]
    )

    records = _extractor(ready_loader).extract_log(path)

    assert len(records) == 3
    assert [record["sl"] for record in records] == [3, 2, 1]
    assert records[0] == {
        "sl": 3,
        "sensor_name": "probe-b",
        "status": "HIGH",
        "temperature": 31.0,
        "timestamp": "2024-01-01T00:02:00Z",
    }
    assert all(
        list(record.keys()) == ["sl", "sensor_name", "status", "temperature", "timestamp"]
        for record in records
    )


def test_extract_preserves_timestamp_representation(make_log_db, ready_loader) -> None:
    path = make_log_db([(1, "probe", "OK", 19.0, 1704067200), (2, "probe", None, None, None)])

    records = _extractor(ready_loader).extract_log(path)

    assert records[0]["timestamp"] is None
    assert records[0]["status"] is None
    assert records[1]["timestamp"] == "1704067200"


def test_extract_empty_table_returns_empty_list(make_log_db, ready_loader) -> None:
    path = make_log_db([])

    assert _extractor(ready_loader).extract_log(path) == []


def test_extract_invalid_file_raises_extraction_error(tmp_path, ready_loader) -> None:
    path = tmp_path / "garbage.db"
    path.write_bytes(b"this is not a sqlite database " * 64)
    engine = CountingEngine(ready_loader.engine)

    with pytest.raises(ExtractionError) as excinfo:
        _extractor(_loader_with(engine)).extract_log(path)

    assert excinfo.value.file_path == path
    assert "Failed to process database file" in str(excinfo.value)
    assert len(engine.closed) == len(engine.opened)
    assert len(engine.closed) <= 1


def test_extract_query_failure_closes_handle_once(make_log_db) -> None:
    path = make_log_db([(1, "probe", "OK", 20.0, "2024-01-01T00:00:00Z")])
    engine = CountingEngine(SQLiteEngine(), fail_query=True)

    with pytest.raises(ExtractionError) as excinfo:
        _extractor(_loader_with(engine)).extract_log(path)

    assert "disk image is malformed" in str(excinfo.value)
    assert engine.queries == [LOG_QUERY]
    assert len(engine.opened) == 1
    assert engine.closed == engine.opened


def test_extract_closes_handle_on_success(make_log_db) -> None:
    path = make_log_db([(1, "probe", "OK", 20.0, "2024-01-01T00:00:00Z")])
    engine = CountingEngine(SQLiteEngine())

    _extractor(_loader_with(engine)).extract_log(path)

    assert len(engine.closed) == 1


def test_extract_missing_table_raises_extraction_error(tmp_path, ready_loader) -> None:
    import sqlite3

    path = tmp_path / "other.db"
    connection = sqlite3.connect(path)
    connection.execute("CREATE TABLE readings (id INTEGER)")
    connection.commit()
    connection.close()

    with pytest.raises(ExtractionError) as excinfo:
        _extractor(ready_loader).extract_log(path)

    assert "no such table: temp_logs" in str(excinfo.value)


def test_extract_empty_file_reports_missing_table(tmp_path, ready_loader) -> None:
    path = tmp_path / "empty.db"
    path.write_bytes(b"")

    with pytest.raises(ExtractionError) as excinfo:
        _extractor(ready_loader).extract_log(path)

    assert "temp_logs" in str(excinfo.value)


def test_extract_missing_file_raises_file_read_error(tmp_path, ready_loader) -> None:
    path = tmp_path / "missing.db"

    with pytest.raises(FileReadError) as excinfo:
        _extractor(ready_loader).extract_log(path)

    assert excinfo.value.file_path == path


def test_extract_requires_ready_engine(make_log_db) -> None:
    path = make_log_db([])
    loader = EngineLoader(resource_path=Path("unused.sql"))

    with pytest.raises(EngineNotInitializedError):
        _extractor(loader).extract_log(path)


def test_extract_logs_row_count(make_log_db, ready_loader, caplog) -> None:
    path = make_log_db([(1, "probe", "OK", 20.0, "2024-01-01T00:00:00Z")])

    with caplog.at_level(logging.INFO, logger="services.extractor"):
        _extractor(ready_loader).extract_log(path)

    records = [record for record in caplog.records if record.name == "services.extractor"]
    assert any(getattr(record, "row_count", None) == 1 for record in records)
    assert any(getattr(record, "file_path", None) == str(path) for record in records)


def test_extract_reads_wal_mode_backup(make_log_db, ready_loader) -> None:
    path = make_log_db(
        [
            (1, "probe-a", "OK", 20.5, "2024-01-01T00:00:00Z"),
            (2, "probe-b", "OK", 21.0, "2024-01-01T00:01:00Z"),
        ],
        name="wal.db",
        journal_mode="WAL",
    )
    original = path.read_bytes()
    assert original[18:20] == b"\x02\x02"

    records = _extractor(ready_loader).extract_log(path)

    assert [record["sl"] for record in records] == [2, 1]
    assert path.read_bytes() == original


def test_unready_engine_is_reported_before_missing_file(tmp_path) -> None:
    loader = EngineLoader(resource_path=Path("unused.sql"))

    with pytest.raises(EngineNotInitializedError):
        _extractor(loader).extract_log(tmp_path / "missing.db")
