from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..core.config import DATA_DIR, DATABASE_FILE
from ..core.labels import DEFAULT_LOCALE
from ..core.scheduler import (
    CUTOFF_HOUR,
    DEFAULT_START_HOUR,
    DEFAULT_START_MINUTE,
    MAX_SPREAD_DAYS,
    SHIFT_MINUTES,
    PlacementWindow,
)

load_dotenv()


@dataclass(frozen=True)
class PlannerSettings:
    start_hour: int
    start_minute: int
    shift_minutes: int
    cutoff_hour: int
    max_spread_days: int

    @property
    def window(self) -> PlacementWindow:
        return PlacementWindow(
            start_hour=self.start_hour,
            start_minute=self.start_minute,
            shift_minutes=self.shift_minutes,
            cutoff_hour=self.cutoff_hour,
            max_spread_days=self.max_spread_days,
        )


@dataclass(frozen=True)
class StorageSettings:
    data_dir: Path
    database_file: Path


@dataclass(frozen=True)
class UiSettings:
    app_name: str
    locale: str


@dataclass(frozen=True)
class ApiSettings:
    host: str
    port: int


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    log_dir: Optional[Path]


@dataclass(frozen=True)
class AppSettings:
    planner: PlannerSettings
    storage: StorageSettings
    ui: UiSettings
    api: ApiSettings
    logging: LoggingSettings


def _int_from_env(name: str, default: int, *, minimum: int = 0, maximum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value < minimum or (maximum is not None and value > maximum):
        return default
    return value


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    planner = PlannerSettings(
        start_hour=_int_from_env("PREP_PLANNER_START_HOUR", DEFAULT_START_HOUR, maximum=23),
        start_minute=_int_from_env("PREP_PLANNER_START_MINUTE", DEFAULT_START_MINUTE, maximum=59),
        shift_minutes=_int_from_env("PREP_PLANNER_SHIFT_MINUTES", SHIFT_MINUTES, minimum=1),
        cutoff_hour=_int_from_env("PREP_PLANNER_CUTOFF_HOUR", CUTOFF_HOUR, maximum=23),
        max_spread_days=_int_from_env("PREP_PLANNER_MAX_SPREAD_DAYS", MAX_SPREAD_DAYS, minimum=1),
    )

    storage = StorageSettings(data_dir=DATA_DIR, database_file=DATABASE_FILE)

    ui = UiSettings(
        app_name=os.getenv("PREP_PLANNER_APP_NAME", "Prep Planner"),
        locale=os.getenv("PREP_PLANNER_LOCALE", DEFAULT_LOCALE),
    )

    api = ApiSettings(
        host=os.getenv("PREP_PLANNER_API_HOST", "127.0.0.1"),
        port=_int_from_env("PREP_PLANNER_API_PORT", 8000, minimum=1),
    )

    log_dir = os.getenv("PREP_PLANNER_LOG_DIR")
    logging_settings = LoggingSettings(
        level=os.getenv("PREP_PLANNER_LOG_LEVEL", "INFO").upper(),
        log_dir=Path(log_dir) if log_dir else None,
    )

    return AppSettings(planner=planner, storage=storage, ui=ui, api=api, logging=logging_settings)
