"""Domain errors.

Доменные исключения приложения.
"""

from task_tracker.core.enums import TaskStatus
from task_tracker.shared.errors.base import AppException


class ValidationError(AppException):
    """Ошибка валидации данных."""

    status_code = 400
    code = "VALIDATION_ERROR"


class NotFoundError(AppException):
    """Ресурс не найден."""

    status_code = 404
    code = "NOT_FOUND"


class ConflictError(AppException):
    """Конфликт данных."""

    status_code = 409
    code = "CONFLICT"


class ServiceUnavailableError(AppException):
    """Сервис недоступен."""

    status_code = 503
    code = "SERVICE_UNAVAILABLE"


class InternalServerError(AppException):
    """Внутренняя ошибка сервера."""

    status_code = 500
    code = "INTERNAL_SERVER_ERROR"


class TaskNotFoundError(NotFoundError):
    """Задача не найдена."""

    def __init__(self, task_id: int) -> None:
        """Инициализация исключения.

        Args:
            task_id: Идентификатор задачи.

        """
        self.task_id = task_id
        super().__init__(
            message=f"Task with id {task_id} not found",
            details={"task_id": task_id},
        )


class InvalidTaskStateError(ConflictError):
    """Недопустимый переход статуса задачи."""

    def __init__(
        self,
        task_id: int,
        current_status: TaskStatus,
        requested_status: TaskStatus,
    ) -> None:
        """Инициализация исключения.

        Args:
            task_id: Идентификатор задачи.
            current_status: Текущий статус задачи.
            requested_status: Запрошенный статус.

        """
        self.task_id = task_id
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            message=(
                f"Cannot move task from {current_status.value} "
                f"to {requested_status.value}"
            ),
            details={
                "task_id": task_id,
                "current_status": current_status.value,
                "requested_status": requested_status.value,
            },
        )


class ConcurrencyConflictError(ConflictError):
    """Задача была изменена параллельным запросом."""

    def __init__(
        self,
        task_id: int,
        expected_version: int | None = None,
        actual_version: int | None = None,
    ) -> None:
        """Инициализация исключения.

        Args:
            task_id: Идентификатор задачи.
            expected_version: Версия, с которой работал клиент.
            actual_version: Версия, сохранённая в хранилище.

        """
        self.task_id = task_id
        self.expected_version = expected_version
        self.actual_version = actual_version

        message = f"Task with id {task_id} was modified concurrently"
        if expected_version is not None and actual_version is not None:
            message += f" (expected version {expected_version}, found {actual_version})"

        super().__init__(
            message=message,
            details={
                "task_id": task_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )
