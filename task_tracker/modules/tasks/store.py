"""Task Store: контракт хранилища задач и in-memory реализация.

Хранилище назначает id, version и timestamps, а также отвечает
за optimistic locking: save() с устаревшей версией отклоняется.
"""

import itertools
from collections.abc import Iterable
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Protocol, runtime_checkable


from task_tracker.core.constants import INITIAL_TASK_VERSION
from task_tracker.modules.tasks.models import Task, TaskSlice
from task_tracker.modules.tasks.query import PageQuery
from task_tracker.shared.errors import ConcurrencyConflictError, TaskNotFoundError
from task_tracker.shared.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class TaskStore(Protocol):
    """Protocol для хранилищ задач."""

    async def insert(self, task: Task) -> Task:
        """Сохранить новую задачу.

        Args:
            task: Задача без id.

        Returns:
            Сохранённая задача с id, version и timestamps.

        """
        ...

    async def find_by_id(self, task_id: int) -> Task | None:
        """Найти задачу по id.

        Returns:
            Задача или None если не найдена.

        """
        ...

    async def exists_by_id(self, task_id: int) -> bool:
        """Проверить существование задачи."""
        ...

    async def save(self, task: Task) -> Task:
        """Сохранить изменения существующей задачи.

        Args:
            task: Задача с версией, на которой основаны изменения.

        Returns:
            Сохранённая задача с увеличенной версией.

        Raises:
            ConcurrencyConflictError: Версия задачи устарела.
            TaskNotFoundError: Задача удалена.

        """
        ...

    async def delete_by_id(self, task_id: int) -> None:
        """Удалить задачу."""
        ...

    async def find_page(self, query: PageQuery) -> TaskSlice:
        """Получить отсортированную страницу задач.

        Args:
            query: Проверенный запрос страницы.

        Returns:
            Элементы страницы и общее количество задач.

        """
        ...

    async def health_check(self) -> bool:
        """Проверить доступность хранилища."""
        ...

    async def cleanup(self) -> None:
        """Освободить ресурсы (закрыть соединения).

        Вызывается при shutdown приложения.
        """
        ...


def utcnow() -> datetime:
    """Текущее время в UTC."""
    return datetime.now(UTC)


def _comparable(value: Any) -> Any:
    """Привести значение к виду, сравнимому между задачами."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    if isinstance(value, Enum):
        # Enum сортируется по символьному имени
        return value.value
    return value


def sort_tasks(tasks: Iterable[Task], query: PageQuery) -> list[Task]:
    """Отсортировать задачи по полю запроса.

    Равные значения упорядочиваются по id по возрастанию
    независимо от направления сортировки.

    Args:
        tasks: Задачи для сортировки.
        query: Запрос с полем и направлением сортировки.

    Returns:
        Новый отсортированный список.

    """
    attribute = query.sort_by.attribute
    ordered = sorted(tasks, key=lambda task: task.id or 0)
    return sorted(
        ordered,
        key=lambda task: _comparable(getattr(task, attribute)),
        reverse=query.descending,
    )


class InMemoryTaskStore:
    """In-memory хранилище задач.

    Используется в тестах и как fallback в development, когда Redis
    недоступен. Отдаёт копии, чтобы изменения вне хранилища
    не попадали в сохранённые данные.
    """

    def __init__(self) -> None:
        """Инициализация хранилища."""
        self._tasks: dict[int, Task] = {}
        self._sequence = itertools.count(1)

    async def insert(self, task: Task) -> Task:
        task_id = next(self._sequence)
        now = utcnow()
        stored = task.model_copy(
            update={
                "id": task_id,
                "version": INITIAL_TASK_VERSION,
                "created_at": now,
                "updated_at": now,
            },
            deep=True,
        )
        self._tasks[task_id] = stored
        return stored.model_copy(deep=True)

    async def find_by_id(self, task_id: int) -> Task | None:
        task = self._tasks.get(task_id)
        return task.model_copy(deep=True) if task is not None else None

    async def exists_by_id(self, task_id: int) -> bool:
        return task_id in self._tasks

    async def save(self, task: Task) -> Task:
        if task.id is None:
            msg = "Cannot save a task without id"
            raise ValueError(msg)

        current = self._tasks.get(task.id)
        if current is None:
            raise TaskNotFoundError(task.id)

        if current.version != task.version:
            logger.warning(
                "Optimistic lock conflict",
                task_id=task.id,
                expected_version=task.version,
                actual_version=current.version,
            )
            raise ConcurrencyConflictError(
                task.id,
                expected_version=task.version,
                actual_version=current.version,
            )

        stored = task.model_copy(
            update={
                "version": (current.version or INITIAL_TASK_VERSION) + 1,
                "created_at": current.created_at,
                "updated_at": utcnow(),
            },
            deep=True,
        )
        self._tasks[task.id] = stored
        return stored.model_copy(deep=True)

    async def delete_by_id(self, task_id: int) -> None:
        self._tasks.pop(task_id, None)

    async def find_page(self, query: PageQuery) -> TaskSlice:
        ordered = sort_tasks(self._tasks.values(), query)
        window = ordered[query.offset : query.offset + query.size]
        return TaskSlice(
            items=[task.model_copy(deep=True) for task in window],
            total_elements=len(ordered),
        )

    async def health_check(self) -> bool:
        return True

    async def cleanup(self) -> None:
        logger.debug("InMemoryTaskStore closed", tasks=len(self._tasks))
