"""
Tests for the Task API.

============================================================
PURPOSE
============================================================
Verify the HTTP contract of the task endpoints and the
metrics bookkeeping each endpoint performs.

TEST PRINCIPLES:
- Validation errors are 400 and never reach the registry
- Unknown ids are 404
- Errors are a single {"error": "..."} string
- Unexpected failures are 500

============================================================
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from core.clock import MockClock
from core.config import AppConfig
from monitoring.metrics import MetricsAggregator, TaskOperation
from task_registry.registry import TaskRegistry


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def clock():
    return MockClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def registry(clock):
    return TaskRegistry(clock=clock)


@pytest.fixture
def metrics():
    return MetricsAggregator()


@pytest.fixture
def client(registry, metrics, clock):
    app = create_app(
        config=AppConfig(app_name="task-manager-test"),
        registry=registry,
        metrics_aggregator=metrics,
        clock=clock,
    )
    return TestClient(app)


# ============================================================
# LIST
# ============================================================

class TestListTasks:
    """GET /tasks"""

    def test_list_empty(self, client):
        response = client.get("/tasks")

        assert response.status_code == 200
        assert response.json() == {"tasks": []}

    def test_list_in_creation_order(self, client, registry):
        registry.create("Task 1")
        registry.create("Task 2")

        response = client.get("/tasks")

        assert [t["title"] for t in response.json()["tasks"]] == ["Task 1", "Task 2"]

    def test_list_counts_operation(self, client, metrics):
        client.get("/tasks")

        snapshot = metrics.snapshot()
        assert snapshot.request_count == 1
        assert snapshot.operation_count(TaskOperation.LIST) == 1
        assert len(snapshot.durations) == 1

    def test_list_failure_is_500(self, client, registry):
        registry.get_all = MagicMock(side_effect=RuntimeError("boom"))

        response = client.get("/tasks")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch tasks"}

    def test_api_prefix(self, client, registry):
        registry.create("Task 1")

        response = client.get("/api/tasks")

        assert response.status_code == 200
        assert len(response.json()["tasks"]) == 1


# ============================================================
# CREATE
# ============================================================

class TestCreateTask:
    """POST /tasks"""

    def test_create(self, client, registry):
        response = client.post("/tasks", json={"title": "Buy milk"})

        assert response.status_code == 201
        task = response.json()["task"]
        assert task["title"] == "Buy milk"
        assert task["completed"] is False
        assert task["createdAt"] == "2026-01-01T12:00:00.000Z"
        assert registry.get_by_id(task["id"]) is not None

    def test_create_trims_title(self, client):
        response = client.post("/tasks", json={"title": "  Buy milk  "})

        assert response.json()["task"]["title"] == "Buy milk"

    @pytest.mark.parametrize(
        "body",
        [{}, {"title": ""}, {"title": "   "}, {"title": 42}, {"title": None}, ["Buy milk"]],
    )
    def test_create_invalid_title(self, client, registry, body):
        response = client.post("/tasks", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Title is required and must be a non-empty string"}
        assert registry.count() == 0

    def test_create_ignores_client_supplied_identity(self, client):
        response = client.post(
            "/tasks",
            json={"title": "Buy milk", "id": "mine", "completed": True},
        )

        task = response.json()["task"]
        assert task["id"] != "mine"
        assert task["completed"] is False

    def test_malformed_json_is_500(self, client, metrics):
        response = client.post(
            "/tasks",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create task"}

    def test_create_metrics(self, client, metrics):
        client.post("/tasks", json={"title": "Buy milk"})
        client.post("/tasks", json={"title": ""})

        snapshot = metrics.snapshot()
        assert snapshot.request_count == 2
        assert snapshot.operation_count(TaskOperation.CREATE) == 1
        assert len(snapshot.durations) == 1


# ============================================================
# UPDATE
# ============================================================

class TestUpdateTask:
    """PATCH /tasks/{id}"""

    def test_update_completed(self, client, registry, clock):
        task = registry.create("Buy milk")
        clock.advance(seconds=30)

        response = client.patch(f"/tasks/{task.id}", json={"completed": True})

        assert response.status_code == 200
        body = response.json()["task"]
        assert body["completed"] is True
        assert body["id"] == task.id
        assert body["title"] == "Buy milk"
        assert body["createdAt"] == "2026-01-01T12:00:00.000Z"

    def test_update_title(self, client, registry):
        task = registry.create("Buy milk")

        response = client.patch(f"/tasks/{task.id}", json={"title": " Buy oat milk "})

        assert response.json()["task"]["title"] == "Buy oat milk"

    def test_update_empty_body_is_noop(self, client, registry):
        task = registry.create("Buy milk")

        response = client.patch(f"/tasks/{task.id}", json={})

        assert response.status_code == 200
        assert response.json()["task"] == task.to_dict()

    def test_update_cannot_overwrite_identity(self, client, registry):
        task = registry.create("Buy milk")

        response = client.patch(
            f"/tasks/{task.id}",
            json={"id": "other", "createdAt": "1999-01-01T00:00:00.000Z"},
        )

        assert response.json()["task"] == task.to_dict()

    @pytest.mark.parametrize(
        "body,message",
        [
            ({"title": ""}, "Title must be a non-empty string"),
            ({"title": 7}, "Title must be a non-empty string"),
            ({"title": None}, "Title must be a non-empty string"),
            ({"completed": "yes"}, "Completed must be a boolean"),
            ({"completed": 1}, "Completed must be a boolean"),
            ({"completed": None}, "Completed must be a boolean"),
            ({"title": "", "completed": "yes"}, "Title must be a non-empty string"),
        ],
    )
    def test_update_invalid(self, client, registry, body, message):
        task = registry.create("Buy milk")

        response = client.patch(f"/tasks/{task.id}", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": message}
        assert registry.get_by_id(task.id) == task

    def test_update_missing(self, client, registry, metrics):
        response = client.patch("/tasks/does-not-exist", json={"completed": True})

        assert response.status_code == 404
        assert response.json() == {"error": "Task not found"}
        assert registry.count() == 0
        assert len(metrics.snapshot().durations) == 1


# ============================================================
# DELETE
# ============================================================

class TestDeleteTask:
    """DELETE /tasks/{id}"""

    def test_delete(self, client, registry, metrics):
        task = registry.create("Buy milk")

        response = client.delete(f"/tasks/{task.id}")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert registry.get_by_id(task.id) is None
        assert metrics.snapshot().operation_count(TaskOperation.DELETE) == 1

    def test_delete_twice(self, client, registry, metrics):
        task = registry.create("Buy milk")

        client.delete(f"/tasks/{task.id}")
        response = client.delete(f"/tasks/{task.id}")

        assert response.status_code == 404
        assert response.json() == {"error": "Task not found"}
        snapshot = metrics.snapshot()
        assert snapshot.operation_count(TaskOperation.DELETE) == 1
        assert snapshot.request_count == 2
        assert len(snapshot.durations) == 2


# ============================================================
# SCENARIO
# ============================================================

class TestTaskLifecycle:
    """Full round trip through the API."""

    def test_buy_milk(self, client):
        created = client.post("/tasks", json={"title": "Buy milk"}).json()["task"]

        listed = client.get("/tasks").json()["tasks"]
        assert listed == [created]

        updated = client.patch(f"/tasks/{created['id']}", json={"completed": True}).json()["task"]
        assert updated == {**created, "completed": True}

        assert client.delete(f"/tasks/{created['id']}").json() == {"success": True}
        assert client.get("/tasks").json() == {"tasks": []}

        metrics_text = client.get("/metrics").text
        assert "http_requests_total 5\n" in metrics_text
        assert "tasks_total 0\n" in metrics_text
        assert 'task_operations_total{operation="create"} 1\n' in metrics_text
        assert 'task_operations_total{operation="delete"} 1\n' in metrics_text
        assert 'task_operations_total{operation="list"} 2\n' in metrics_text
