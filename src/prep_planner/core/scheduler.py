from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .labels import DEFAULT_LOCALE, day_label, today_label
from .models import Placement, PlacementKind, Slot, Task, existing_slot_pool, time_from_minutes

logger = logging.getLogger(__name__)

DEFAULT_START_HOUR = 16
DEFAULT_START_MINUTE = 0
SHIFT_MINUTES = 30
CUTOFF_HOUR = 22
MAX_SPREAD_DAYS = 7

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class PlacementWindow:
    """Working window the placer probes within, in minutes since midnight."""

    start_hour: int = DEFAULT_START_HOUR
    start_minute: int = DEFAULT_START_MINUTE
    shift_minutes: int = SHIFT_MINUTES
    cutoff_hour: int = CUTOFF_HOUR
    max_spread_days: int = MAX_SPREAD_DAYS

    @property
    def start(self) -> int:
        return self.start_hour * 60 + self.start_minute

    @property
    def start_time(self) -> str:
        return time_from_minutes(self.start)

    @property
    def escape(self) -> int:
        """First probe start whose hour is past the cutoff hour."""
        limit = (self.cutoff_hour + 1) * 60
        if self.start >= limit:
            return self.start
        steps = math.ceil((limit - self.start) / self.shift_minutes)
        return self.start + steps * self.shift_minutes

    def probe_starts(self) -> range:
        return range(self.start, self.escape, self.shift_minutes)


DEFAULT_WINDOW = PlacementWindow()


def _as_date(value: Optional[DateLike]) -> date:
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def plan_spread(
    deadline: DateLike,
    prep_minutes: int,
    now: Optional[DateLike] = None,
    *,
    max_days: int = MAX_SPREAD_DAYS,
) -> Tuple[int, int]:
    """Return ``(days_to_spread, minutes_per_day)`` for a task.

    Days are counted between today (midnight) and the deadline day, clamped to
    ``[1, max_days]``. Minutes per day are rounded up, so the total may exceed
    ``prep_minutes`` by fewer than ``days_to_spread`` minutes.
    """
    diff_days = (_as_date(deadline) - _as_date(now)).days
    days_to_spread = max(1, min(diff_days, max_days))
    minutes_per_day = math.ceil(prep_minutes / days_to_spread)
    return days_to_spread, minutes_per_day


def _collides(start: int, end: int, slots: Sequence[Slot]) -> bool:
    return any(slot.overlaps(start, end) for slot in slots)


def place_day(
    task_name: str,
    day: date,
    minutes_per_day: int,
    existing_slots: Iterable[Slot],
    *,
    task_id: str = "",
    window: PlacementWindow = DEFAULT_WINDOW,
    locale: str = DEFAULT_LOCALE,
) -> Placement:
    """Find the earliest free start on ``day`` that avoids every existing slot.

    Starts are probed in fixed increments from the window start. When the
    probe passes the cutoff hour the next candidate is accepted anyway, so a
    slot is always returned.
    """
    same_day = [slot for slot in existing_slots if slot.date == day]
    probes = 0
    for start in window.probe_starts():
        probes += 1
        if not _collides(start, start + minutes_per_day, same_day):
            return Placement(
                slot=_make_slot(task_id, task_name, day, start, minutes_per_day, locale),
                kind=PlacementKind.PLACED,
                probes=probes,
            )

    start = window.escape
    kind = PlacementKind.FAIL_SAFE
    if not probes and not _collides(start, start + minutes_per_day, same_day):
        kind = PlacementKind.PLACED
    if kind is PlacementKind.FAIL_SAFE:
        logger.info(
            "No free slot for '%s' on %s before %02d:00; accepting %s",
            task_name,
            day.isoformat(),
            window.cutoff_hour,
            time_from_minutes(start),
        )
    return Placement(
        slot=_make_slot(task_id, task_name, day, start, minutes_per_day, locale),
        kind=kind,
        probes=probes,
    )


def _make_slot(task_id: str, task_name: str, day: date, start: int, duration: int, locale: str) -> Slot:
    return Slot(
        task_id=task_id,
        task_name=task_name,
        date=day,
        start_time=time_from_minutes(start),
        duration=duration,
        label=day_label(day, locale),
    )


def plan_placements(
    name: str,
    prep_minutes: int,
    deadline: DateLike,
    existing_tasks: Iterable[Task],
    *,
    now: Optional[DateLike] = None,
    task_id: str = "",
    window: PlacementWindow = DEFAULT_WINDOW,
    locale: str = DEFAULT_LOCALE,
) -> List[Placement]:
    today = _as_date(now)
    deadline_day = _as_date(deadline)
    pool = existing_slot_pool(existing_tasks)
    days_to_spread, minutes_per_day = plan_spread(
        deadline_day, prep_minutes, today, max_days=window.max_spread_days
    )
    logger.debug(
        "Spreading %s min for '%s' over %s day(s) at %s min/day",
        prep_minutes,
        name,
        days_to_spread,
        minutes_per_day,
    )

    placements: List[Placement] = []
    for index in range(days_to_spread):
        day = today + timedelta(days=index + 1)
        if day > deadline_day:
            continue
        placements.append(
            place_day(name, day, minutes_per_day, pool, task_id=task_id, window=window, locale=locale)
        )

    if not placements:
        logger.info("No spread day before deadline %s for '%s'; scheduling today", deadline_day, name)
        fallback = Slot(
            task_id=task_id,
            task_name=name,
            date=today,
            start_time=window.start_time,
            duration=prep_minutes,
            label=today_label(locale),
        )
        placements.append(Placement(slot=fallback, kind=PlacementKind.FALLBACK, probes=0))
    return placements


def plan_slots(
    name: str,
    prep_minutes: int,
    deadline: DateLike,
    existing_tasks: Iterable[Task],
    *,
    now: Optional[DateLike] = None,
    task_id: str = "",
    window: PlacementWindow = DEFAULT_WINDOW,
    locale: str = DEFAULT_LOCALE,
) -> List[Slot]:
    """Plan the preparation slots of a new task against committed tasks."""
    placements = plan_placements(
        name,
        prep_minutes,
        deadline,
        existing_tasks,
        now=now,
        task_id=task_id,
        window=window,
        locale=locale,
    )
    return [placement.slot for placement in placements]
