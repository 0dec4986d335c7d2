"""Process-wide, lazily initialized access to the embedded database engine."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from enum import Enum
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Callable, Optional

from engine.base import DatabaseEngine
from engine.sqlite import SQLiteEngine
from errors import EngineInitError, EngineNotInitializedError
from settings import DEVELOPMENT_RESOURCES_DIR, Settings, get_settings

logger = logging.getLogger(__name__)

RESOURCE_FILENAME = "engine_init.sql"

EngineFactory = Callable[[Optional[bytes]], DatabaseEngine]


class EngineState(str, Enum):
    """Lifecycle of the engine loader."""

    uninitialized = "uninitialized"
    initializing = "initializing"
    ready = "ready"
    failed = "failed"


def resolve_resource_path(settings: Settings) -> Path:
    """Pick the bootstrap resource location for the configured engine mode."""
    if settings.is_development:
        return DEVELOPMENT_RESOURCES_DIR / RESOURCE_FILENAME
    return settings.engine_resources_path / RESOURCE_FILENAME


class EngineLoader:
    """Initializes the engine once; concurrent callers share one attempt.

    A failed attempt leaves the loader in ``failed`` and the next call to
    :meth:`ensure_ready` starts a fresh attempt.
    """

    def __init__(
        self,
        resource_path: Path,
        factory: EngineFactory = SQLiteEngine.from_resource,
        engine_mode: str = "packaged",
    ) -> None:
        self.resource_path = resource_path
        self.engine_mode = engine_mode
        self._factory = factory
        self._lock = Lock()
        self._state = EngineState.uninitialized
        self._pending: Optional[Future[DatabaseEngine]] = None
        self._engine: Optional[DatabaseEngine] = None

    @property
    def state(self) -> EngineState:
        with self._lock:
            return self._state

    @property
    def is_ready(self) -> bool:
        return self.state is EngineState.ready

    @property
    def engine(self) -> DatabaseEngine:
        with self._lock:
            if self._state is not EngineState.ready or self._engine is None:
                raise EngineNotInitializedError()
            return self._engine

    def ensure_ready(self) -> DatabaseEngine:
        with self._lock:
            if self._state is EngineState.ready and self._engine is not None:
                return self._engine
            pending = self._pending
            owner = pending is None
            if pending is None:
                pending = Future()
                self._pending = pending
                self._state = EngineState.initializing

        if not owner:
            return pending.result()

        try:
            engine = self._initialize()
        except BaseException as exc:
            reason = str(exc) or type(exc).__name__
            error = EngineInitError(f"Failed to initialize database engine: {reason}")
            with self._lock:
                self._state = EngineState.failed
                self._pending = None
            logger.error(
                "Engine initialization failed",
                extra={"reason": reason, "state": EngineState.failed.value},
            )
            pending.set_exception(error)
            # Interrupts and exits keep their own type for the owning caller.
            if not isinstance(exc, Exception):
                raise
            raise error from exc

        with self._lock:
            self._engine = engine
            self._state = EngineState.ready
            self._pending = None
        pending.set_result(engine)
        logger.info(
            "Database engine initialized",
            extra={"engine_mode": self.engine_mode, "state": EngineState.ready.value},
        )
        return engine

    def _initialize(self) -> DatabaseEngine:
        if self.resource_path.exists():
            data = self.resource_path.read_bytes()
            return self._factory(data)

        logger.warning(
            "Engine resource not found; falling back to built-in defaults",
            extra={
                "resource_path": str(self.resource_path),
                "engine_mode": self.engine_mode,
            },
        )
        return self._factory(None)


@lru_cache
def build_default_loader() -> EngineLoader:
    """Factory for the process-wide loader configured from settings."""
    settings = get_settings()
    return EngineLoader(
        resource_path=resolve_resource_path(settings),
        engine_mode=settings.engine_mode,
    )
