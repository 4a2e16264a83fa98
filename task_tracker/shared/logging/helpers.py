"""Helper функции для структурированного логирования."""

import time
from types import TracebackType
from typing import Any

from loguru import logger


class LogExecutionTime:
    """Context manager для логирования времени выполнения операции.

    Example:
        >>> with LogExecutionTime("tasks.find_page", page=0, size=20):
        ...     result = await store.find_page(query)
        # Логирует: "Operation completed: tasks.find_page (1.23ms)"

    """

    def __init__(self, operation: str, **extra_fields: Any) -> None:
        """Инициализировать context manager.

        Args:
            operation: Название операции
            **extra_fields: Дополнительные поля для логирования

        """
        self.operation = operation
        self.extra_fields = extra_fields
        self.start_time = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "LogExecutionTime":
        """Начать измерение времени."""
        self.start_time = time.perf_counter()
        logger.debug(f"Operation started: {self.operation}", **self.extra_fields)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Завершить измерение и залогировать результат."""
        self.elapsed_ms = (time.perf_counter() - self.start_time) * 1000

        log_data = {
            "operation": self.operation,
            "latency_ms": round(self.elapsed_ms, 2),
            **self.extra_fields,
        }

        if exc_type is not None:
            logger.warning(
                f"Operation failed: {self.operation} ({self.elapsed_ms:.2f}ms)",
                error_type=exc_type.__name__,
                error_message=str(exc_val),
                **log_data,
            )
        else:
            logger.debug(
                f"Operation completed: {self.operation} ({self.elapsed_ms:.2f}ms)",
                **log_data,
            )
