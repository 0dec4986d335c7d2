"""Capability interface for the embedded query engine."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Protocol, Tuple


class EngineError(Exception):
    """Raised by an engine when opening or querying a database fails."""


@dataclass(slots=True)
class QueryResult:
    """Tabular output of a single statement."""

    columns: List[str]
    rows: List[Tuple[Any, ...]] = field(default_factory=list)


class DatabaseEngine(Protocol):
    """Anything that can open a database from bytes, query it and close it."""

    def open(self, data: bytes) -> Any:
        ...

    def query(self, handle: Any, sql: str) -> Optional[QueryResult]:
        ...

    def close(self, handle: Any) -> None:
        ...


@contextmanager
def scoped_database(engine: DatabaseEngine, data: bytes) -> Iterator[Any]:
    """Yield a database handle that is closed exactly once on every exit path."""

    handle = engine.open(data)
    try:
        yield handle
    finally:
        engine.close(handle)
