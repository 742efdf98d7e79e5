# API tests for the function registry and the FastAPI app
import pytest
from fastapi.testclient import TestClient

from conftest import day
from prep_planner.api import api_state, call_api, get_api_functions
from prep_planner.services.http import app


@pytest.fixture
def bound_state(context):
    api_state.bind(context)
    yield api_state


@pytest.fixture
def client(bound_state):
    return TestClient(app)


@pytest.mark.api
class TestRegistry:
    def test_functions_are_registered(self):
        names = {func.name for func in get_api_functions()}
        assert {
            "preview_task",
            "approve_task",
            "list_tasks",
            "get_task",
            "delete_task",
            "regenerate_plans",
            "week_calendar",
            "slots_for_day",
        } <= names

    def test_parameter_schema(self):
        preview = next(func for func in get_api_functions() if func.name == "preview_task")
        schema = preview.parameter_schema
        assert schema["required"] == ["name", "prep_minutes", "deadline"]
        assert schema["properties"]["prep_minutes"]["type"] == "integer"
        assert schema["properties"]["description"]["default"] == ""

    def test_unknown_function(self):
        with pytest.raises(KeyError):
            call_api("does_not_exist")

    def test_functions_taking_a_name_argument(self, bound_state):
        result = call_api("preview_task", name="Essay", prep_minutes=30, deadline=day(1).isoformat())
        assert result["task"]["name"] == "Essay"
        assert [slot["duration"] for slot in result["slots"]] == [30]

    def test_approve_then_query(self, bound_state):
        created = call_api("approve_task", name="Exam", prep_minutes=120, deadline=day(3).isoformat())
        task = created["task"]
        assert task["scheduled_minutes"] == 120
        assert [slot["start_time"] for slot in task["slots"]] == ["16:00"] * 3
        assert call_api("list_tasks")["tasks"][0]["id"] == task["id"]
        assert call_api("slots_for_day", day=day(1).isoformat())["slots"][0]["end_time"] == "16:40"
        week = call_api("week_calendar")
        assert len(week["days"]) == 7
        assert week["days"][3]["deadlines"] == ["Exam"]
        assert call_api("delete_task", task_id=task["id"]) == {"deleted": task["id"]}


@pytest.mark.api
class TestHttpApi:
    def test_list_functions(self, client):
        response = client.get("/api/functions")
        assert response.status_code == 200
        assert any(item["name"] == "preview_task" for item in response.json()["functions"])

    def test_preview(self, client):
        response = client.post(
            "/api/functions/preview_task",
            json={"arguments": {"name": "Exam", "prep_minutes": 120, "deadline": day(3).isoformat()}},
        )
        assert response.status_code == 200
        result = response.json()["result"]
        assert [slot["duration"] for slot in result["slots"]] == [40, 40, 40]
        assert result["used_fallback"] is False
        assert call_api("list_tasks") == {"tasks": []}

    def test_validation_error(self, client):
        response = client.post(
            "/api/functions/preview_task",
            json={"arguments": {"name": "", "prep_minutes": 30, "deadline": day(3).isoformat()}},
        )
        assert response.status_code == 422

    def test_missing_task(self, client):
        response = client.post("/api/functions/get_task", json={"arguments": {"task_id": "missing"}})
        assert response.status_code == 404

    def test_unknown_function(self, client):
        response = client.post("/api/functions/nope", json={"arguments": {}})
        assert response.status_code == 404

    def test_bad_arguments(self, client):
        response = client.post("/api/functions/slots_for_day", json={"arguments": {"day": "tomorrow"}})
        assert response.status_code == 400
