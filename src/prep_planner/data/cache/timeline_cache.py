from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List

from ...core import Slot, Task


def _date_range(start: date, end: date) -> Iterable[date]:
    delta = (end - start).days
    for index in range(delta + 1):
        yield start + timedelta(days=index)


def start_of_week(anchor: date) -> date:
    return anchor - timedelta(days=anchor.weekday())


@dataclass
class DayCell:
    day: date
    is_today: bool
    deadlines: List[Task] = field(default_factory=list)
    slots: List[Slot] = field(default_factory=list)


@dataclass
class SlotTimeline:
    """Calendar view of committed slots and deadlines keyed by date."""

    tasks_by_id: Dict[str, Task] = field(default_factory=dict)
    slots_index: Dict[date, List[Slot]] = field(default_factory=dict)
    deadlines_index: Dict[date, List[str]] = field(default_factory=dict)

    def hydrate(self, tasks: Iterable[Task]) -> None:
        self.clear()
        for task in tasks:
            self._index_task(task)

    def _index_task(self, task: Task) -> None:
        self.tasks_by_id[task.id] = task
        self.deadlines_index.setdefault(task.deadline, []).append(task.id)
        for slot in task.slots:
            self.slots_index.setdefault(slot.date, []).append(slot)

    def upsert(self, task: Task) -> None:
        if task.id in self.tasks_by_id:
            self.remove(task.id)
        self._index_task(task)

    def remove(self, task_id: str) -> bool:
        if task_id not in self.tasks_by_id:
            return False
        task = self.tasks_by_id.pop(task_id)
        ids = self.deadlines_index.get(task.deadline, [])
        if task_id in ids:
            ids.remove(task_id)
        if not ids:
            self.deadlines_index.pop(task.deadline, None)
        for slot in task.slots:
            remaining = [item for item in self.slots_index.get(slot.date, []) if item.task_id != task_id]
            if remaining:
                self.slots_index[slot.date] = remaining
            else:
                self.slots_index.pop(slot.date, None)
        return True

    def slots_for_day(self, target_day: date) -> List[Slot]:
        return sorted(self.slots_index.get(target_day, []), key=lambda slot: slot.start_time)

    def deadlines_for_day(self, target_day: date) -> List[Task]:
        return [self.tasks_by_id[task_id] for task_id in self.deadlines_index.get(target_day, [])]

    def slots_between(self, start: date, end: date) -> List[Slot]:
        collected: list[Slot] = []
        for day in _date_range(start, end):
            collected.extend(self.slots_for_day(day))
        return collected

    def week_of(self, anchor: date, *, today: date | None = None) -> List[DayCell]:
        """Monday to Sunday cells for the week containing ``anchor``."""
        current = today or anchor
        monday = start_of_week(anchor)
        return [
            DayCell(
                day=day,
                is_today=day == current,
                deadlines=self.deadlines_for_day(day),
                slots=self.slots_for_day(day),
            )
            for day in _date_range(monday, monday + timedelta(days=6))
        ]

    def clear(self) -> None:
        self.tasks_by_id.clear()
        self.slots_index.clear()
        self.deadlines_index.clear()
