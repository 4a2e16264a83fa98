"""Error handling decorators.

Декораторы для обработки ошибок.
"""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger

from task_tracker.shared.errors.base import AppException
from task_tracker.shared.errors.mapping import map_exception

T = TypeVar("T")


def map_store_errors(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Декоратор для методов хранилища.

    Перехватывает технические исключения и преобразует их в доменные
    через ExceptionMapper. Доменные исключения пробрасываются как есть.

    Args:
        func: Асинхронная функция для декорирования.

    Returns:
        Обернутая функция.

    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except AppException:
            raise
        except Exception as e:
            logger.exception(
                f"Technical error in {func.__qualname__}",
                exception_type=type(e).__name__,
                exception_message=str(e),
            )
            raise map_exception(e) from e

    return wrapper
