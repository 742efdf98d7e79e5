# Unit tests for the planning service workflow
import orjson
import pytest

from conftest import TODAY, day, make_task
from prep_planner.core import PlacementKind
from prep_planner.services import TaskNotFoundError, TaskValidationError


@pytest.mark.unit
class TestValidation:
    @pytest.mark.parametrize(
        "name, prep, deadline",
        [
            ("", 30, "2026-10-22"),
            ("   ", 30, "2026-10-22"),
            ("Essay", None, "2026-10-22"),
            ("Essay", "", "2026-10-22"),
            ("Essay", 30, ""),
            ("Essay", 30, None),
        ],
    )
    def test_required_fields(self, service, name, prep, deadline):
        with pytest.raises(TaskValidationError, match="required"):
            service.validate(name, prep, deadline)

    @pytest.mark.parametrize("prep", ["abc", 0, -15, 12.5, True])
    def test_preparation_time_must_be_positive_whole_minutes(self, service, prep):
        with pytest.raises(TaskValidationError):
            service.validate("Essay", prep, "2026-10-22")

    def test_deadline_in_past(self, service):
        with pytest.raises(TaskValidationError, match="past"):
            service.validate("Essay", 30, day(-1).isoformat())

    def test_bad_deadline_format(self, service):
        with pytest.raises(TaskValidationError):
            service.validate("Essay", 30, "22/10/2026")

    def test_normalises_input(self, service):
        assert service.validate(" Essay ", "45", TODAY.isoformat()) == ("Essay", 45, TODAY)
        assert service.validate("Essay", 45.0, day(2)) == ("Essay", 45, day(2))


@pytest.mark.unit
class TestPreviewAndApprove:
    def test_preview_is_not_stored(self, service, database):
        preview = service.preview("Exam", 120, day(3).isoformat())
        assert [slot.duration for slot in preview.task.slots] == [40, 40, 40]
        assert all(slot.task_id == preview.task.id for slot in preview.task.slots)
        assert database.list_tasks() == []

    def test_approve_commits_the_previewed_plan(self, service, database):
        preview = service.preview("Exam", 120, day(3).isoformat(), "chapter 1-4")
        task = service.approve(preview.task)
        assert task == preview.task
        assert database.list_tasks() == [task]
        assert task.description == "chapter 1-4"

    def test_second_task_is_planned_around_first(self, service):
        first = service.approve(service.preview("Maths", 60, day(1).isoformat()).task)
        second = service.approve(service.preview("History", 30, day(1).isoformat()).task)
        assert first.slots[0].start_time == "16:00"
        assert second.slots[0].start_time == "17:00"

    def test_fallback_is_reported(self, service):
        preview = service.preview("Talk", 90, TODAY.isoformat())
        assert preview.used_fallback
        assert preview.task.slots[0].label == "Today"
        assert preview.placements[0].kind is PlacementKind.FALLBACK

    def test_fail_safe_days_are_reported(self, service, database):
        database.add_task(make_task("busy", slots=[(day(1), "16:00", 7 * 60)]))
        preview = service.preview("Essay", 30, day(1).isoformat())
        assert preview.fail_safe_days == [day(1)]
        assert preview.task.slots[0].start_time == "23:00"


@pytest.mark.unit
class TestTaskCollection:
    def test_get_and_delete(self, service, context):
        task = service.approve(service.preview("Essay", 30, day(2).isoformat()).task)
        assert service.get_task(task.id) == task
        assert service.delete_task(task.id) == task
        assert context.timeline.slots_for_day(day(1)) == []
        with pytest.raises(TaskNotFoundError):
            service.get_task(task.id)
        with pytest.raises(TaskNotFoundError):
            service.delete_task("missing")

    def test_regenerate_replays_in_stored_order(self, service, database):
        database.add_task(make_task("a", "Maths", prep_minutes=60, deadline=day(1), slots=[(day(1), "18:00", 60)]))
        database.add_task(make_task("b", "History", prep_minutes=30, deadline=day(1), slots=[(day(1), "18:00", 30)]))
        tasks = service.regenerate()
        assert [(task.id, task.slots[0].start_time) for task in tasks] == [("a", "16:00"), ("b", "17:00")]
        assert database.list_tasks() == tasks

    def test_import_browser_export(self, service, tmp_path):
        service.approve(service.preview("Maths", 60, day(1).isoformat()).task)
        export = tmp_path / "export.json"
        export.write_bytes(
            orjson.dumps(
                [
                    {
                        "id": 1760000000000,
                        "name": "Presentation",
                        "desc": "",
                        "prep": 30,
                        "deadline": day(1).isoformat(),
                        "createdAt": "2026-10-18T08:00:00.000Z",
                        "slots": [{"taskName": "Presentation", "date": day(1).isoformat(), "startTime": "16:00", "duration": 30, "label": "x"}],
                    }
                ]
            )
        )
        tasks = service.import_tasks(export)
        assert [task.name for task in tasks] == ["Maths", "Presentation"]
        assert tasks[1].slots[0].start_time == "17:00"
        assert tasks[1].slots[0].task_id == "1760000000000"
        assert len(service.import_tasks(export)) == 2

    def test_import_rejects_bad_records(self, service):
        with pytest.raises(TaskValidationError):
            service.import_tasks([{"name": "no id", "prep": 30}])

    @pytest.mark.parametrize("prep", [None, 0, -30, "later"])
    def test_import_rejects_missing_or_non_positive_prep_time(self, service, database, prep):
        record = {"id": "x", "name": "Old", "deadline": day(2).isoformat()}
        if prep is not None:
            record["prep"] = prep
        with pytest.raises(TaskValidationError):
            service.import_tasks([record])
        assert database.list_tasks() == []

    @pytest.mark.parametrize(
        "slot",
        [
            {"date": "someday", "startTime": "16:00", "duration": 30},
            {"date": "2026-10-20", "duration": 30},
            {"date": "2026-10-20", "startTime": "16:00"},
        ],
    )
    def test_import_rejects_malformed_slots(self, service, database, slot):
        record = {"id": "x", "name": "Old", "prep": 30, "deadline": day(2).isoformat(), "slots": [slot]}
        with pytest.raises(TaskValidationError):
            service.import_tasks([record])
        assert database.list_tasks() == []

    def test_imported_slots_have_positive_duration(self, service):
        tasks = service.import_tasks([{"id": "x", "name": "Old", "prep_minutes": 45, "deadline": day(2).isoformat()}])
        assert [slot.duration for slot in tasks[0].slots] == [23, 23]

    def test_week(self, service):
        task = service.approve(service.preview("Exam", 120, day(3).isoformat()).task)
        week = service.week()
        assert week[0].day == TODAY and week[0].is_today
        assert [cell.slots[0].task_id for cell in week[1:4]] == [task.id] * 3
        assert week[3].deadlines == [task]
