from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Tuple


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError as exc:  # noqa: TRY003
            raise ValueError(f"Invalid ISO date: {value!r}") from exc
    raise ValueError(f"Unsupported date value: {value!r}")


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:  # noqa: TRY003
            raise ValueError(f"Invalid ISO timestamp: {value!r}") from exc
    raise ValueError(f"Unsupported datetime value: {value!r}")


def minutes_from_time(value: str) -> int:
    """Convert an ``HH:MM`` string to minutes since midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def time_from_minutes(total: int) -> str:
    """Format minutes since midnight as ``HH:MM``, wrapping past midnight."""
    return f"{(total // 60) % 24:02d}:{total % 60:02d}"


class PlacementKind(str, Enum):
    PLACED = "placed"
    FAIL_SAFE = "fail_safe"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Slot:
    task_id: str
    task_name: str
    date: date
    start_time: str
    duration: int
    label: str

    @property
    def start_minutes(self) -> int:
        return minutes_from_time(self.start_time)

    @property
    def end_minutes(self) -> int:
        return self.start_minutes + self.duration

    @property
    def end_time(self) -> str:
        return time_from_minutes(self.end_minutes)

    def overlaps(self, start: int, end: int) -> bool:
        """Half-open interval test: touching endpoints do not overlap."""
        return start < self.end_minutes and end > self.start_minutes

    @classmethod
    def from_dict(cls, data: dict, *, task_id: str = "") -> "Slot":
        # exports from the browser app use camelCase keys and no task id
        return cls(
            task_id=str(data.get("task_id") or task_id),
            task_name=str(data.get("task_name", data.get("taskName", ""))),
            date=_parse_date(data["date"]),
            start_time=str(data["start_time"] if "start_time" in data else data["startTime"]),
            duration=int(data["duration"]),
            label=str(data.get("label", "")),
        )

    def to_dict(self) -> dict:
        return {
            "task_id": self.task_id,
            "task_name": self.task_name,
            "date": self.date.isoformat(),
            "start_time": self.start_time,
            "duration": self.duration,
            "label": self.label,
        }


@dataclass(frozen=True)
class Placement:
    """Outcome of placing one slot, tagged with how it was obtained."""

    slot: Slot
    kind: PlacementKind = PlacementKind.PLACED
    probes: int = 1


@dataclass(frozen=True)
class Task:
    id: str
    name: str
    prep_minutes: int
    deadline: date
    created_at: datetime
    description: str = ""
    slots: Tuple[Slot, ...] = field(default_factory=tuple)

    @property
    def scheduled_minutes(self) -> int:
        return sum(slot.duration for slot in self.slots)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        identifier = str(data["id"])
        return cls(
            id=identifier,
            name=str(data["name"]),
            prep_minutes=int(data["prep_minutes"] if "prep_minutes" in data else data["prep"]),
            deadline=_parse_date(data["deadline"]),
            created_at=_parse_datetime(data.get("created_at") or data.get("createdAt") or datetime.now()),
            description=data.get("description", data.get("desc")) or "",
            slots=tuple(Slot.from_dict(item, task_id=identifier) for item in data.get("slots") or []),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "prep_minutes": self.prep_minutes,
            "deadline": self.deadline.isoformat(),
            "created_at": self.created_at.isoformat(),
            "slots": [slot.to_dict() for slot in self.slots],
        }


def existing_slot_pool(tasks: Iterable[Task]) -> Tuple[Slot, ...]:
    """Flatten the slots of committed tasks into a read-only pool."""
    return tuple(slot for task in tasks for slot in task.slots)
