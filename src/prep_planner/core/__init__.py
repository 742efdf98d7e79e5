"""Core domain models, slot planning, and persistence utilities."""

from .config import (
    APP_NAME,
    DATA_DIR,
    DATABASE_FILE,
    DEFAULT_DATABASE_CONTENT,
    ensure_data_dir,
)
from .database import JsonDatabase
from .labels import day_label, short_weekday, today_label
from .models import Placement, PlacementKind, Slot, Task, existing_slot_pool
from .scheduler import (
    CUTOFF_HOUR,
    DEFAULT_START_HOUR,
    DEFAULT_WINDOW,
    MAX_SPREAD_DAYS,
    SHIFT_MINUTES,
    PlacementWindow,
    place_day,
    plan_placements,
    plan_slots,
    plan_spread,
)

__all__ = [
    "APP_NAME",
    "CUTOFF_HOUR",
    "DATA_DIR",
    "DATABASE_FILE",
    "DEFAULT_DATABASE_CONTENT",
    "DEFAULT_START_HOUR",
    "DEFAULT_WINDOW",
    "JsonDatabase",
    "MAX_SPREAD_DAYS",
    "Placement",
    "PlacementKind",
    "PlacementWindow",
    "SHIFT_MINUTES",
    "Slot",
    "Task",
    "day_label",
    "ensure_data_dir",
    "existing_slot_pool",
    "place_day",
    "plan_placements",
    "plan_slots",
    "plan_spread",
    "short_weekday",
    "today_label",
]
