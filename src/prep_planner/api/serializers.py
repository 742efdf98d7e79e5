from __future__ import annotations

from typing import Any, Dict

from ..core import Slot, Task
from ..data import DayCell
from .models import DayPayload, SlotPayload, TaskPayload


def serialize_slot(slot: Slot) -> Dict[str, Any]:
    return SlotPayload.from_domain(slot).model_dump()


def serialize_task(task: Task) -> Dict[str, Any]:
    return TaskPayload.from_domain(task).model_dump()


def serialize_day(cell: DayCell) -> Dict[str, Any]:
    return DayPayload.from_domain(cell).model_dump()
