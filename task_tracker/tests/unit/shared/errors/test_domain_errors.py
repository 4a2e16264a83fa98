"""Тесты для доменных исключений.

Покрывает:
- HTTP status codes
- Коды ошибок
- Сообщения и details задач
"""

import pytest

from task_tracker.core.enums import TaskStatus
from task_tracker.shared.errors import (
    ConcurrencyConflictError,
    ConflictError,
    InternalServerError,
    InvalidTaskStateError,
    NotFoundError,
    ServiceUnavailableError,
    TaskNotFoundError,
    ValidationError,
)


class TestStandardErrors:
    """Тесты стандартных исключений."""

    @pytest.mark.parametrize(
        ("error_cls", "status_code", "code"),
        [
            (ValidationError, 400, "VALIDATION_ERROR"),
            (NotFoundError, 404, "NOT_FOUND"),
            (ConflictError, 409, "CONFLICT"),
            (ServiceUnavailableError, 503, "SERVICE_UNAVAILABLE"),
            (InternalServerError, 500, "INTERNAL_SERVER_ERROR"),
        ],
    )
    def test_status_and_code(self, error_cls, status_code, code):
        error = error_cls()

        assert error.status_code == status_code
        assert error.code == code

    def test_validation_default_message(self):
        """Проверяет извлечение сообщения из docstring."""
        assert "валидации" in ValidationError().message.lower()


class TestTaskNotFoundError:
    """Тесты для TaskNotFoundError."""

    def test_fields(self):
        error = TaskNotFoundError(42)

        assert isinstance(error, NotFoundError)
        assert error.status_code == 404
        assert error.code == "TASK_NOT_FOUND"
        assert error.message == "Task with id 42 not found"
        assert error.task_id == 42
        assert error.details == {"task_id": 42}


class TestInvalidTaskStateError:
    """Тесты для InvalidTaskStateError."""

    def test_fields(self):
        error = InvalidTaskStateError(7, TaskStatus.COMPLETED, TaskStatus.PENDING)

        assert isinstance(error, ConflictError)
        assert error.status_code == 409
        assert error.code == "INVALID_TASK_STATE"
        assert error.message == "Cannot move task from COMPLETED to PENDING"
        assert error.details == {
            "task_id": 7,
            "current_status": "COMPLETED",
            "requested_status": "PENDING",
        }


class TestConcurrencyConflictError:
    """Тесты для ConcurrencyConflictError."""

    def test_with_versions(self):
        error = ConcurrencyConflictError(3, expected_version=1, actual_version=2)

        assert error.status_code == 409
        assert error.code == "CONCURRENCY_CONFLICT"
        assert error.message == (
            "Task with id 3 was modified concurrently (expected version 1, found 2)"
        )
        assert error.details == {"task_id": 3, "expected_version": 1, "actual_version": 2}

    def test_without_versions(self):
        """Неизвестные версии не попадают в details."""
        error = ConcurrencyConflictError(3)

        assert error.message == "Task with id 3 was modified concurrently"
        assert error.details == {"task_id": 3}

    def test_distinct_from_not_found(self):
        assert not isinstance(ConcurrencyConflictError(1), NotFoundError)
