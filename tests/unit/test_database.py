# Unit tests for JSON task storage
import orjson
import pytest

from conftest import day, make_task
from prep_planner.core import JsonDatabase


@pytest.mark.unit
class TestJsonDatabase:
    def test_new_file_is_initialised(self, tmp_path):
        path = tmp_path / "nested" / "tasks.json"
        database = JsonDatabase(path)
        assert path.exists()
        assert orjson.loads(path.read_bytes()) == {"tasks": [], "metadata": {"schema_version": 1}}
        assert database.list_tasks() == []

    def test_add_and_reload(self, database):
        task = make_task("a", "Essay", slots=[(day(1), "16:00", 30)])
        database.add_task(task)
        assert JsonDatabase(database.path).list_tasks() == [task]

    def test_add_replaces_same_id(self, database):
        database.add_task(make_task("a", "Essay"))
        database.add_task(make_task("a", "Essay v2"))
        tasks = database.list_tasks()
        assert [task.name for task in tasks] == ["Essay v2"]

    def test_get_and_delete(self, database):
        database.add_task(make_task("a"))
        database.add_task(make_task("b"))
        assert database.get_task("b").id == "b"
        assert database.delete_task("a") is True
        assert database.delete_task("a") is False
        assert database.get_task("a") is None
        assert [task.id for task in JsonDatabase(database.path).list_tasks()] == ["b"]

    def test_existing_slots_flatten_all_tasks(self, database):
        database.add_task(make_task("a", slots=[(day(1), "16:00", 30)]))
        database.add_task(make_task("b", slots=[(day(1), "16:30", 30), (day(2), "16:00", 30)]))
        assert len(database.existing_slots()) == 3

    def test_replace_tasks(self, database):
        database.add_task(make_task("a"))
        database.replace_tasks([make_task("c"), make_task("b")])
        assert [task.id for task in database.list_tasks()] == ["c", "b"]

    def test_bare_task_list_is_rejected(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_bytes(orjson.dumps([{"id": 1, "name": "Essay", "prep": 30, "deadline": "2026-10-22"}]))
        with pytest.raises(ValueError, match="JSON object"):
            JsonDatabase(path).list_tasks()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            JsonDatabase(path).list_tasks()
