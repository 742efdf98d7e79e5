from __future__ import annotations

from typing import Any, Dict, List

from .registry import register_api
from .serializers import serialize_slot, serialize_task
from .state import api_state


@register_api(
    "preview_task",
    description="Plan preparation slots for a new task without storing it.",
    category="tasks",
    tags=("plan", "preview"),
)
def preview_task(name: str, prep_minutes: int, deadline: str, description: str = "") -> Dict[str, Any]:
    preview = api_state.planning.preview(name, prep_minutes, deadline, description)
    return {
        "task": serialize_task(preview.task),
        "slots": [serialize_slot(slot) for slot in preview.task.slots],
        "fail_safe_days": [day.isoformat() for day in preview.fail_safe_days],
        "used_fallback": preview.used_fallback,
    }


@register_api(
    "approve_task",
    description="Plan a new task against the stored tasks and commit it.",
    category="tasks",
    tags=("plan", "approve", "create"),
)
def approve_task(name: str, prep_minutes: int, deadline: str, description: str = "") -> Dict[str, Any]:
    preview = api_state.planning.preview(name, prep_minutes, deadline, description)
    task = api_state.planning.approve(preview.task)
    return {"task": serialize_task(task)}


@register_api(
    "list_tasks",
    description="List stored tasks ordered by deadline.",
    category="tasks",
    tags=("list",),
)
def list_tasks() -> Dict[str, List[dict]]:
    tasks = sorted(api_state.planning.list_tasks(), key=lambda task: (task.deadline, task.name))
    return {"tasks": [serialize_task(task) for task in tasks]}


@register_api(
    "get_task",
    description="Return a stored task and its slots.",
    category="tasks",
    tags=("read",),
)
def get_task(task_id: str) -> Dict[str, Any]:
    return {"task": serialize_task(api_state.planning.get_task(task_id))}


@register_api(
    "delete_task",
    description="Delete a stored task and release its slots.",
    category="tasks",
    tags=("delete",),
)
def delete_task(task_id: str) -> Dict[str, Any]:
    task = api_state.planning.delete_task(task_id)
    return {"deleted": task.id}


@register_api(
    "regenerate_plans",
    description="Replan every stored task in order so no two tasks overlap.",
    category="tasks",
    tags=("plan", "regenerate"),
)
def regenerate_plans() -> Dict[str, List[dict]]:
    tasks = api_state.planning.regenerate()
    return {"tasks": [serialize_task(task) for task in tasks]}
