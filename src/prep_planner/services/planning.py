from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple, Union
from uuid import uuid4

import orjson

from ..core import Placement, PlacementKind, Task, plan_placements
from ..data import DayCell, SlotTimeline
from .context import ServiceContext
from .errors import TaskNotFoundError, TaskValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Name, deadline and preparation time are required."
PAST_DEADLINE_MESSAGE = "The deadline cannot be in the past."


def _parse_deadline(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:  # noqa: TRY003
        raise TaskValidationError("Deadline must be in YYYY-MM-DD format.") from exc


def _parse_minutes(value: Any) -> int:
    if isinstance(value, bool):
        raise TaskValidationError("Preparation time must be a whole number of minutes.")
    if isinstance(value, float):
        if not value.is_integer():
            raise TaskValidationError("Preparation time must be a whole number of minutes.")
        value = int(value)
    try:
        minutes = int(str(value).strip())
    except ValueError as exc:  # noqa: TRY003
        raise TaskValidationError("Preparation time must be a whole number of minutes.") from exc
    if minutes <= 0:
        raise TaskValidationError("Preparation time must be a positive number of minutes.")
    return minutes


@dataclass(frozen=True)
class PlanPreview:
    task: Task
    placements: Tuple[Placement, ...] = field(default_factory=tuple)

    @property
    def fail_safe_days(self) -> List[date]:
        return [item.slot.date for item in self.placements if item.kind is PlacementKind.FAIL_SAFE]

    @property
    def used_fallback(self) -> bool:
        return any(item.kind is PlacementKind.FALLBACK for item in self.placements)


@dataclass(slots=True)
class PlanningService:
    context: ServiceContext = field(default_factory=ServiceContext)

    @property
    def locale(self) -> str:
        return self.context.settings.ui.locale

    def validate(
        self,
        name: Optional[str],
        prep_minutes: Any,
        deadline: Union[str, date, datetime, None],
    ) -> Tuple[str, int, date]:
        """Normalise form input, rejecting anything the planner must not see."""
        cleaned_name = (name or "").strip()
        if not cleaned_name or deadline in (None, "") or prep_minutes in (None, ""):
            raise TaskValidationError(REQUIRED_FIELDS_MESSAGE)
        minutes = _parse_minutes(prep_minutes)
        deadline_day = _parse_deadline(deadline)
        if deadline_day < self.context.now().date():
            raise TaskValidationError(PAST_DEADLINE_MESSAGE)
        return cleaned_name, minutes, deadline_day

    def _plan(self, task: Task, existing: Iterable[Task]) -> Tuple[Placement, ...]:
        placements = tuple(
            plan_placements(
                task.name,
                task.prep_minutes,
                task.deadline,
                existing,
                now=self.context.now(),
                task_id=task.id,
                window=self.context.settings.planner.window,
                locale=self.locale,
            )
        )
        fail_safe = [item for item in placements if item.kind is PlacementKind.FAIL_SAFE]
        if fail_safe:
            logger.warning("Task '%s' has %s slot(s) placed past the working window", task.name, len(fail_safe))
        return placements

    def preview(
        self,
        name: Optional[str],
        prep_minutes: Any,
        deadline: Union[str, date, datetime, None],
        description: str = "",
    ) -> PlanPreview:
        cleaned_name, minutes, deadline_day = self.validate(name, prep_minutes, deadline)
        draft = Task(
            id=uuid4().hex,
            name=cleaned_name,
            prep_minutes=minutes,
            deadline=deadline_day,
            created_at=self.context.now(),
            description=(description or "").strip(),
        )
        placements = self._plan(draft, self.context.database.list_tasks())
        return PlanPreview(task=replace(draft, slots=tuple(item.slot for item in placements)), placements=placements)

    def approve(self, task: Task) -> Task:
        """Re-plan ``task`` against the stored tasks and commit it."""
        existing = [item for item in self.context.database.list_tasks() if item.id != task.id]
        placements = self._plan(task, existing)
        committed = replace(task, slots=tuple(item.slot for item in placements))
        if committed.slots != task.slots:
            logger.info("Plan for '%s' changed between preview and approval", task.name)
        self.context.database.add_task(committed)
        self.context.timeline.upsert(committed)
        logger.info("Committed task '%s' with %s slot(s)", committed.name, len(committed.slots))
        return committed

    def list_tasks(self) -> List[Task]:
        return self.context.database.list_tasks()

    def get_task(self, task_id: str) -> Task:
        task = self.context.database.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def delete_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        self.context.database.delete_task(task_id)
        self.context.timeline.remove(task_id)
        logger.info("Deleted task '%s'", task.name)
        return task

    def _regenerate(self, tasks: Iterable[Task]) -> List[Task]:
        regenerated: List[Task] = []
        for task in tasks:
            placements = self._plan(task, regenerated)
            regenerated.append(replace(task, slots=tuple(item.slot for item in placements)))
        self.context.database.replace_tasks(regenerated)
        self.context.timeline.hydrate(regenerated)
        return regenerated

    def regenerate(self) -> List[Task]:
        """Replay every stored task in order so the whole plan is conflict-free again."""
        tasks = self._regenerate(self.context.database.list_tasks())
        logger.info("Regenerated plans for %s task(s)", len(tasks))
        return tasks

    def import_tasks(self, source: Union[Path, str, List[dict], dict]) -> List[Task]:
        """Append exported task records and regenerate every plan."""
        if isinstance(source, (str, Path)):
            path = Path(source).expanduser().resolve()
            try:
                source = orjson.loads(path.read_bytes())
            except orjson.JSONDecodeError as exc:
                raise TaskValidationError(f"{path} is not valid JSON.") from exc
        records = source.get("tasks", []) if isinstance(source, dict) else list(source or [])
        incoming: List[Task] = []
        for record in records:
            if not isinstance(record, dict):
                raise TaskValidationError(f"Invalid task record: {record!r}")
            minutes = _parse_minutes(record.get("prep_minutes", record.get("prep")))
            try:
                incoming.append(replace(Task.from_dict(record), prep_minutes=minutes))
            except (KeyError, TypeError, ValueError) as exc:
                raise TaskValidationError(f"Invalid task record: {exc}") from exc

        current = self.context.database.list_tasks()
        known = {task.id for task in current}
        added = [task for task in incoming if task.id not in known]
        logger.info("Importing %s task(s), skipping %s duplicate(s)", len(added), len(incoming) - len(added))
        return self._regenerate([*current, *added])

    def week(self, anchor: Optional[date] = None) -> List[DayCell]:
        today = self.context.now().date()
        timeline: SlotTimeline = self.context.refresh_timeline()
        return timeline.week_of(anchor or today, today=today)
