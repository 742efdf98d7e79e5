"""Application services orchestrating storage and slot planning."""

from __future__ import annotations

from .context import ServiceContext
from .errors import TaskNotFoundError, TaskValidationError
from .planning import PlanningService, PlanPreview
from .rendering import render_plan_preview, render_task_list, render_week

__all__ = [
    "PlanPreview",
    "PlanningService",
    "ServiceContext",
    "TaskNotFoundError",
    "TaskValidationError",
    "render_plan_preview",
    "render_task_list",
    "render_week",
]
