"""Базовое исключение Task Tracker.

Каждая ошибка, которую сервис отдаёт клиенту, наследуется от `AppException`
и сама знает свой HTTP статус, машинный код и тело ответа.
"""

import re
from typing import Any, ClassVar

from loguru import logger
from pydantic import ValidationError

from task_tracker.shared.errors.context import get_trace_id
from task_tracker.shared.errors.schemas import ErrorDetail, ErrorResponse

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def code_from_class_name(name: str) -> str:
    """Построить машинный код ошибки из имени класса.

    Суффикс Error/Exception отбрасывается, CamelCase переводится в UPPER_SNAKE.

    Args:
        name: Имя класса исключения.

    Returns:
        Код ошибки, например TASK_NOT_FOUND для TaskNotFoundError.

    """
    base = name.removesuffix("Exception").removesuffix("Error") or name
    return _CAMEL_BOUNDARY.sub("_", base).upper()


class AppException(Exception):
    """Внутренняя ошибка сервера.

    Подклассы получают автоматически:
    - code из имени класса, если он не задан явно
    - default_message из первой строки docstring
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: ClassVar[str] = "Внутренняя ошибка сервера"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        if "code" not in cls.__dict__:
            cls.code = code_from_class_name(cls.__name__)

        doc = cls.__dict__.get("__doc__")
        if "default_message" not in cls.__dict__ and doc:
            cls.default_message = doc.strip().splitlines()[0]

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | ErrorDetail | None = None,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        """Создать ошибку.

        Args:
            message: Сообщение для клиента, по умолчанию default_message.
            details: Структурированный контекст (task_id, field и т.п.).
            status_code: Переопределение HTTP статуса.
            code: Переопределение машинного кода.

        Raises:
            ValueError: details не соответствуют ErrorDetail.

        """
        self.message = message or self.default_message
        self.details = self._normalize_details(details)

        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code

        super().__init__(self.message)

    def _normalize_details(self, details: dict[str, Any] | ErrorDetail | None) -> dict[str, Any]:
        if details is None:
            return {}
        if isinstance(details, ErrorDetail):
            return details.model_dump(exclude_none=True)

        try:
            return ErrorDetail.model_validate(details).model_dump(exclude_none=True)
        except ValidationError as e:
            logger.error(
                "Некорректные details у исключения",
                exception=self.__class__.__name__,
                errors=e.errors(include_url=False),
            )
            msg = "Invalid details format"
            raise ValueError(msg) from e

    @property
    def headers(self) -> dict[str, str]:
        """Заголовки ответа с кодом ошибки и trace_id запроса."""
        return {"X-Error-Code": self.code, "X-Trace-Id": get_trace_id()}

    def to_response(self) -> ErrorResponse:
        """Собрать тело ответа.

        Returns:
            ErrorResponse с кодом, сообщением, details и trace_id.

        """
        return ErrorResponse(
            error=self.code,
            message=self.message,
            details=self.details,
            trace_id=get_trace_id(),
        )

    @classmethod
    def openapi_response(cls) -> dict[str, Any]:
        """Описание ответа для `responses=` в декораторах роутов."""
        example = ErrorResponse(
            error=cls.code,
            message=cls.default_message,
            trace_id="example-trace-id",
        )
        return {
            "model": ErrorResponse,
            "description": cls.default_message,
            "content": {"application/json": {"example": example.model_dump()}},
        }
