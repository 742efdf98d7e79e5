"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    ApiSettings,
    AppSettings,
    LoggingSettings,
    PlannerSettings,
    StorageSettings,
    UiSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "LoggingSettings",
    "PlannerSettings",
    "StorageSettings",
    "UiSettings",
    "get_settings",
]
