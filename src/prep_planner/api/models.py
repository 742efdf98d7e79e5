from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..core import Slot, Task
from ..data import DayCell


class SlotPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    task_id: str
    task_name: str
    date: str
    start_time: str
    end_time: str
    duration: int = Field(gt=0)
    label: str

    @classmethod
    def from_domain(cls, slot: Slot) -> "SlotPayload":
        return cls(
            task_id=slot.task_id,
            task_name=slot.task_name,
            date=slot.date.isoformat(),
            start_time=slot.start_time,
            end_time=slot.end_time,
            duration=slot.duration,
            label=slot.label,
        )


class TaskPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str = Field(default="")
    prep_minutes: int = Field(gt=0)
    deadline: str
    created_at: str
    scheduled_minutes: int
    slots: List[SlotPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, task: Task) -> "TaskPayload":
        return cls(
            id=task.id,
            name=task.name,
            description=task.description,
            prep_minutes=task.prep_minutes,
            deadline=task.deadline.isoformat(),
            created_at=task.created_at.isoformat(),
            scheduled_minutes=task.scheduled_minutes,
            slots=[SlotPayload.from_domain(slot) for slot in task.slots],
        )


class DayPayload(BaseModel):
    date: str
    is_today: bool
    deadlines: List[str] = Field(default_factory=list)
    slots: List[SlotPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, cell: DayCell) -> "DayPayload":
        return cls(
            date=cell.day.isoformat(),
            is_today=cell.is_today,
            deadlines=[task.name for task in cell.deadlines],
            slots=[SlotPayload.from_domain(slot) for slot in cell.slots],
        )
