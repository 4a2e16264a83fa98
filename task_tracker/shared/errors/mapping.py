"""Преобразование ошибок хранилища задач в доменные исключения.

Redis клиент бросает собственную иерархию исключений. Наружу из хранилища
выходят только наследники AppException: недоступный Redis становится
ServiceUnavailableError (503), всё прочее InternalServerError (500).
"""

import redis.exceptions

from task_tracker.shared.errors.base import AppException
from task_tracker.shared.errors.domain_errors import (
    InternalServerError,
    ServiceUnavailableError,
)


class ExceptionMapper:
    """Маппер технических исключений хранилища.

    Правила проверяются по порядку, первое подходящее побеждает.

    Examples:
        >>> error = ExceptionMapper().map(redis.exceptions.ConnectionError("refused"))
        >>> error.status_code
        503
    """

    _RULES: tuple[tuple[type[Exception], type[AppException]], ...] = (
        (redis.exceptions.ConnectionError, ServiceUnavailableError),
        (redis.exceptions.TimeoutError, ServiceUnavailableError),
        (redis.exceptions.RedisError, ServiceUnavailableError),
    )

    def map(self, exception: Exception) -> AppException:
        """Подобрать доменное исключение.

        Args:
            exception: Исключение из клиента хранилища.

        Returns:
            Доменное исключение. AppException возвращается без изменений.

        """
        if isinstance(exception, AppException):
            return exception

        details = {"original_exception": type(exception).__name__}

        for source, target in self._RULES:
            if isinstance(exception, source):
                return target(message=f"Task store is unavailable: {exception}", details=details)

        return InternalServerError(message="Unexpected task store error", details=details)


exception_mapper = ExceptionMapper()


def map_exception(exception: Exception) -> AppException:
    """Преобразовать исключение общим экземпляром маппера."""
    return exception_mapper.map(exception)
