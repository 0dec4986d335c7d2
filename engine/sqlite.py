"""SQLite implementation of the engine capability, backed by :mod:`sqlite3`."""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from engine.base import EngineError, QueryResult

logger = logging.getLogger(__name__)

# Applied to every scoped connection. Loaded databases are read-only views.
DEFAULT_BOOTSTRAP_SCRIPT = "PRAGMA query_only = ON;\nPRAGMA trusted_schema = OFF;\n"

_SQLITE_MAGIC = b"SQLite format 3\x00"
_WAL_FORMAT = b"\x02\x02"
_LEGACY_FORMAT = b"\x01\x01"


def _in_memory_image(data: bytes) -> bytes:
    """Rewrite a WAL-mode header to rollback mode; in-memory databases cannot use WAL."""
    if data[:16] == _SQLITE_MAGIC and data[18:20] == _WAL_FORMAT:
        image = bytearray(data)
        image[18:20] = _LEGACY_FORMAT
        return bytes(image)
    return data


class SQLiteEngine:
    """Opens database images in memory; the file on disk is never touched."""

    def __init__(self, bootstrap_script: str = DEFAULT_BOOTSTRAP_SCRIPT) -> None:
        self.bootstrap_script = bootstrap_script

    @classmethod
    def from_resource(cls, data: Optional[bytes]) -> "SQLiteEngine":
        """Build an engine from bootstrap resource bytes, or the built-in default."""
        if data is None:
            return cls()

        try:
            script = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EngineError(f"Bootstrap resource is not valid UTF-8: {exc}") from exc

        # Compile the script once against a scratch database so a broken
        # resource fails at start-up rather than on the first file load.
        probe = sqlite3.connect(":memory:")
        try:
            probe.executescript(script)
        except sqlite3.Error as exc:
            raise EngineError(f"Bootstrap resource failed to run: {exc}") from exc
        finally:
            probe.close()

        return cls(script)

    def open(self, data: bytes) -> sqlite3.Connection:
        connection = sqlite3.connect(":memory:")
        try:
            # A zero-length file is an empty database to SQLite.
            if data:
                connection.deserialize(_in_memory_image(data))
            connection.executescript(self.bootstrap_script)
        except (sqlite3.Error, OverflowError, ValueError) as exc:
            connection.close()
            raise EngineError(str(exc)) from exc
        logger.debug("Opened in-memory database image of %d bytes", len(data))
        return connection

    def query(self, handle: sqlite3.Connection, sql: str) -> Optional[QueryResult]:
        try:
            cursor = handle.execute(sql)
            if cursor.description is None:
                return None
            columns = [column[0] for column in cursor.description]
            rows = cursor.fetchall()
        except sqlite3.Error as exc:
            raise EngineError(str(exc)) from exc
        return QueryResult(columns=columns, rows=rows)

    def close(self, handle: sqlite3.Connection) -> None:
        handle.close()
