from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


_ENGINE_MODE_ENV = "ENGINE_MODE"
_ENGINE_RESOURCES_ENV = "ENGINE_RESOURCES_PATH"
_APP_DATA_ROOT_ENV = "DASHBOARD_APP_DATA_ROOT"
_LOG_LEVEL_ENV = "LOG_LEVEL"

ENGINE_MODES = ("development", "packaged")

PROJECT_ROOT = Path(__file__).resolve().parent
PACKAGED_RESOURCES_DIR = PROJECT_ROOT / "engine" / "resources"
DEVELOPMENT_RESOURCES_DIR = PROJECT_ROOT / "vendor" / "sqlite"


@dataclass(frozen=True)
class Settings:
    engine_mode: str
    engine_resources_path: Path
    app_data_root: Path
    log_level: str

    @property
    def is_development(self) -> bool:
        return self.engine_mode == "development"


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_path_env(name: str, default: Path) -> Path:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return Path(candidate).expanduser()


def _read_engine_mode(default: str) -> str:
    candidate = _read_str_env(_ENGINE_MODE_ENV, default).lower()
    return candidate if candidate in ENGINE_MODES else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        engine_mode=_read_engine_mode("packaged"),
        engine_resources_path=_read_path_env(_ENGINE_RESOURCES_ENV, PACKAGED_RESOURCES_DIR),
        app_data_root=_read_path_env(
            _APP_DATA_ROOT_ENV, Path.home() / ".sensor-log-dashboard"
        ),
        log_level=_read_log_level("INFO"),
    )
