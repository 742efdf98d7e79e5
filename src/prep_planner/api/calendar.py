from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from .registry import register_api
from .serializers import serialize_day, serialize_slot
from .state import api_state


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:  # noqa: TRY003
        raise ValueError(f"Invalid ISO date: {value}") from exc


@register_api(
    "week_calendar",
    description="Return the Monday to Sunday grid of slots and deadlines around a date.",
    category="calendar",
    tags=("read", "week"),
)
def week_calendar(anchor: Optional[str] = None) -> Dict[str, Any]:
    days = api_state.planning.week(_parse_date(anchor) if anchor else None)
    return {
        "start": days[0].day.isoformat(),
        "end": days[-1].day.isoformat(),
        "days": [serialize_day(cell) for cell in days],
    }


@register_api(
    "slots_for_day",
    description="Return committed slots on a specific day ordered by start time.",
    category="calendar",
    tags=("read",),
)
def slots_for_day(day: str) -> Dict[str, Any]:
    target = _parse_date(day)
    timeline = api_state.context.refresh_timeline()
    return {"day": target.isoformat(), "slots": [serialize_slot(slot) for slot in timeline.slots_for_day(target)]}
