"""Unit тесты для /api/v1/tasks endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from task_tracker.shared.errors import ConcurrencyConflictError, ServiceUnavailableError
from task_tracker.tests.factories import make_task

TASKS_URL = "/api/v1/tasks"

VALID_BODY = {
    "title": "Buy milk",
    "description": "2 litres",
    "status": "PENDING",
    "dueDate": "2030-01-01T00:00:00",
}


async def _create(client: AsyncClient, **overrides) -> dict:
    response = await client.post(TASKS_URL, json={**VALID_BODY, **overrides})
    assert response.status_code == 201
    return response.json()


class TestCreateTask:
    """Тесты POST /tasks."""

    @pytest.mark.asyncio
    async def test_create(self, client: AsyncClient) -> None:
        response = await client.post(TASKS_URL, json=VALID_BODY)

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["version"] == 0
        assert data["title"] == "Buy milk"
        assert data["status"] == "PENDING"
        assert data["dueDate"] == "2030-01-01T00:00:00"
        assert data["createdAt"] is not None
        assert data["updatedAt"] is not None

    @pytest.mark.asyncio
    async def test_create_missing_title(self, client: AsyncClient) -> None:
        """Сообщение сервиса доходит до клиента."""
        body = {key: value for key, value in VALID_BODY.items() if key != "title"}

        response = await client.post(TASKS_URL, json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert data["message"] == "Task title must not be null or empty"
        assert response.headers["X-Error-Code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_create_missing_due_date(self, client: AsyncClient) -> None:
        response = await client.post(TASKS_URL, json={**VALID_BODY, "dueDate": None})

        assert response.status_code == 400
        assert response.json()["message"] == "Task due date must not be null"

    @pytest.mark.asyncio
    async def test_create_unknown_status(self, client: AsyncClient) -> None:
        response = await client.post(TASKS_URL, json={**VALID_BODY, "status": "DONE"})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert data["details"]["errors"][0]["loc"] == ["body", "status"]

    @pytest.mark.asyncio
    async def test_create_malformed_json(self, client: AsyncClient) -> None:
        response = await client.post(
            TASKS_URL,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400


class TestGetTask:
    """Тесты GET /tasks/{id}."""

    @pytest.mark.asyncio
    async def test_get(self, client: AsyncClient) -> None:
        created = await _create(client)

        response = await client.get(f"{TASKS_URL}/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_get_missing(self, client: AsyncClient) -> None:
        response = await client.get(f"{TASKS_URL}/99")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "TASK_NOT_FOUND"
        assert data["message"] == "Task with id 99 not found"
        assert data["details"]["task_id"] == 99

    @pytest.mark.asyncio
    async def test_get_non_numeric_id(self, client: AsyncClient) -> None:
        response = await client.get(f"{TASKS_URL}/abc")

        assert response.status_code == 400


class TestListTasks:
    """Тесты GET /tasks."""

    @pytest.mark.asyncio
    async def test_pagination(self, client: AsyncClient) -> None:
        for i in range(7):
            await _create(client, title=f"Task {i}")

        response = await client.get(TASKS_URL, params={"page": 0, "size": 5})

        assert response.status_code == 200
        data = response.json()
        assert len(data["items"]) == 5
        assert data["page"] == 0
        assert data["size"] == 5
        assert data["totalElements"] == 7
        assert data["totalPages"] == 2
        assert data["first"] is True
        assert data["last"] is False

    @pytest.mark.asyncio
    async def test_sorting(self, client: AsyncClient) -> None:
        for title in ["b", "c", "a"]:
            await _create(client, title=title)

        response = await client.get(TASKS_URL, params={"sortBy": "TITLE", "direction": "DESC"})

        assert [item["title"] for item in response.json()["items"]] == ["c", "b", "a"]

    @pytest.mark.asyncio
    async def test_defaults(self, client: AsyncClient) -> None:
        response = await client.get(TASKS_URL)

        data = response.json()
        assert data["page"] == 0
        assert data["size"] == 20
        assert data["items"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("params", "message"),
        [
            ({"page": -1}, "page must be >= 0"),
            ({"size": 0}, "size must be between 1 and 100"),
            ({"size": 101}, "size must be between 1 and 100"),
            ({"sortBy": "priority"}, "Invalid sortBy: priority. Allowed: id, title, status, dueDate"),
            ({"direction": "up"}, "Invalid direction: up. Allowed: asc, desc"),
        ],
    )
    async def test_invalid_params(self, client: AsyncClient, params: dict, message: str) -> None:
        response = await client.get(TASKS_URL, params=params)

        assert response.status_code == 400
        assert response.json()["message"] == message

    @pytest.mark.asyncio
    async def test_non_numeric_page(self, client: AsyncClient) -> None:
        response = await client.get(TASKS_URL, params={"page": "first"})

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"


class TestUpdateTask:
    """Тесты PATCH /tasks/{id}."""

    @pytest.mark.asyncio
    async def test_partial_update(self, client: AsyncClient) -> None:
        created = await _create(client)

        response = await client.patch(
            f"{TASKS_URL}/{created['id']}",
            json={"status": "IN_PROGRESS"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "IN_PROGRESS"
        assert data["title"] == created["title"]
        assert data["description"] == created["description"]
        assert data["dueDate"] == created["dueDate"]
        assert data["version"] == 1

    @pytest.mark.asyncio
    async def test_empty_description_clears(self, client: AsyncClient) -> None:
        created = await _create(client)

        response = await client.patch(f"{TASKS_URL}/{created['id']}", json={"description": ""})

        assert response.json()["description"] == ""

    @pytest.mark.asyncio
    async def test_blank_title_ignored(self, client: AsyncClient) -> None:
        created = await _create(client)

        response = await client.patch(f"{TASKS_URL}/{created['id']}", json={"title": "   "})

        assert response.status_code == 200
        assert response.json()["title"] == "Buy milk"

    @pytest.mark.asyncio
    async def test_due_date_update(self, client: AsyncClient) -> None:
        created = await _create(client)

        response = await client.patch(
            f"{TASKS_URL}/{created['id']}",
            json={"dueDate": "2031-06-15T12:30:00"},
        )

        assert response.json()["dueDate"] == "2031-06-15T12:30:00"

    @pytest.mark.asyncio
    async def test_leaving_completed(self, client: AsyncClient) -> None:
        """Переход из COMPLETED - 409 INVALID_TASK_STATE."""
        created = await _create(client, status="COMPLETED")

        response = await client.patch(f"{TASKS_URL}/{created['id']}", json={"status": "PENDING"})

        assert response.status_code == 409
        data = response.json()
        assert data["error"] == "INVALID_TASK_STATE"
        assert "COMPLETED" in data["message"]
        assert data["details"]["current_status"] == "COMPLETED"
        assert data["details"]["requested_status"] == "PENDING"

    @pytest.mark.asyncio
    async def test_update_missing(self, client: AsyncClient) -> None:
        response = await client.patch(f"{TASKS_URL}/5", json={"title": "x"})

        assert response.status_code == 404
        assert response.json()["error"] == "TASK_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_concurrency_conflict(
        self,
        failing_client: AsyncClient,
        failing_store: MagicMock,
    ) -> None:
        """Конфликт версий - 409 CONCURRENCY_CONFLICT."""
        failing_store.find_by_id = AsyncMock(
            return_value=make_task().model_copy(update={"id": 1, "version": 0})
        )
        failing_store.save = AsyncMock(
            side_effect=ConcurrencyConflictError(1, expected_version=0, actual_version=1)
        )

        response = await failing_client.patch(f"{TASKS_URL}/1", json={"title": "x"})

        assert response.status_code == 409
        data = response.json()
        assert data["error"] == "CONCURRENCY_CONFLICT"
        assert data["details"]["task_id"] == 1


class TestDeleteTask:
    """Тесты DELETE /tasks/{id}."""

    @pytest.mark.asyncio
    async def test_delete_then_get(self, client: AsyncClient) -> None:
        created = await _create(client)

        response = await client.delete(f"{TASKS_URL}/{created['id']}")
        assert response.status_code == 204
        assert response.content == b""

        assert (await client.get(f"{TASKS_URL}/{created['id']}")).status_code == 404
        assert (await client.delete(f"{TASKS_URL}/{created['id']}")).status_code == 404


class TestErrorStatuses:
    """Тесты маппинга ошибок хранилища в HTTP статусы."""

    @pytest.mark.asyncio
    async def test_store_unavailable(
        self,
        failing_client: AsyncClient,
        failing_store: MagicMock,
    ) -> None:
        failing_store.find_by_id = AsyncMock(
            side_effect=ServiceUnavailableError(message="Task store is unavailable: refused")
        )

        response = await failing_client.get(f"{TASKS_URL}/1")

        assert response.status_code == 503
        assert response.json()["error"] == "SERVICE_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_unexpected_error(
        self,
        failing_client: AsyncClient,
        failing_store: MagicMock,
    ) -> None:
        """Непредвиденная ошибка - 500 без деталей исключения."""
        failing_store.find_by_id = AsyncMock(side_effect=RuntimeError("boom"))

        response = await failing_client.get(f"{TASKS_URL}/1")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "INTERNAL_SERVER_ERROR"
        assert "boom" not in data["message"]


class TestTracing:
    """Тесты trace_id."""

    @pytest.mark.asyncio
    async def test_trace_id_propagated(self, client: AsyncClient) -> None:
        """trace_id клиента возвращается в заголовке и теле ошибки."""
        response = await client.get(f"{TASKS_URL}/42", headers={"X-Trace-Id": "trace-123"})

        assert response.headers["X-Trace-Id"] == "trace-123"
        assert response.json()["trace_id"] == "trace-123"
        assert "X-Duration-Ms" in response.headers

    @pytest.mark.asyncio
    async def test_non_utf8_trace_id(self, client: AsyncClient) -> None:
        """Заголовок X-Trace-Id не в UTF-8 не ломает обработку запроса."""
        response = await client.get(f"{TASKS_URL}/42", headers={"X-Trace-Id": b"\xff\xfe"})

        assert response.status_code == 404
        assert response.json()["trace_id"] == "\xff\xfe"
