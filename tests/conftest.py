# Test configuration and fixtures
import os
import tempfile
from datetime import date, datetime, timedelta

import pytest

# Keep the default data directory (database and log file) out of the user's profile.
os.environ.setdefault("PREP_PLANNER_DATA_DIR", tempfile.mkdtemp(prefix="prep-planner-tests-"))

from prep_planner.core import JsonDatabase, Slot, Task  # noqa: E402
from prep_planner.services import PlanningService, ServiceContext  # noqa: E402

# Monday
FIXED_NOW = datetime(2026, 10, 19, 9, 30)
TODAY = FIXED_NOW.date()


def day(offset: int) -> date:
    return TODAY + timedelta(days=offset)


def make_task(
    task_id: str,
    name: str = "Existing",
    *,
    slots=(),
    prep_minutes: int = 60,
    deadline: date | None = None,
) -> Task:
    return Task(
        id=task_id,
        name=name,
        prep_minutes=prep_minutes,
        deadline=deadline or day(7),
        created_at=FIXED_NOW,
        slots=tuple(
            Slot(task_id=task_id, task_name=name, date=slot_day, start_time=start, duration=duration, label="")
            for slot_day, start, duration in slots
        ),
    )


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def database(tmp_path):
    return JsonDatabase(tmp_path / "tasks.json")


@pytest.fixture
def context(database, fixed_now):
    return ServiceContext(database=database, clock=lambda: fixed_now)


@pytest.fixture
def service(context):
    return PlanningService(context)
