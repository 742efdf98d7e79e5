from __future__ import annotations

from typing import Iterable, List, Sequence

from ..core import Slot, Task, short_weekday
from ..data import DayCell

EMPTY_TASK_LIST = "No tasks added yet. Start planning!"


def render_task_list(tasks: Sequence[Task]) -> str:
    if not tasks:
        return EMPTY_TASK_LIST
    lines: List[str] = []
    for task in tasks:
        lines.append(task.name)
        lines.append(f"  Deadline: {task.deadline.isoformat()} • {task.prep_minutes} min  [{task.id}]")
    return "\n".join(lines)


def render_plan_preview(slots: Iterable[Slot]) -> str:
    lines: List[str] = []
    for slot in slots:
        lines.append(f"{slot.label} • {slot.start_time} - {slot.end_time}")
        lines.append(f"  Focus: {slot.task_name} preparation ({slot.duration} min)")
    return "\n".join(lines)


def render_week(days: Sequence[DayCell], locale: str = "en") -> str:
    blocks: List[str] = []
    for cell in days:
        marker = " *" if cell.is_today else ""
        rows = [f"{short_weekday(cell.day, locale)} {cell.day.day}{marker}"]
        rows.extend(f"  DEADLINE  {task.name}" for task in cell.deadlines)
        rows.extend(f"  {slot.start_time} ({slot.duration} min)  {slot.task_name}" for slot in cell.slots)
        blocks.append("\n".join(rows))
    return "\n".join(blocks)
