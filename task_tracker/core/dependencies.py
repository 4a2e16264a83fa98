"""Task Tracker - Dependencies.

Dependency Injection для FastAPI.
"""

from typing import Annotated

from fastapi import Depends, Request

from task_tracker.core.config import Settings, settings
from task_tracker.modules.tasks import TaskService, TaskStore


# ==================== Configuration Dependencies ====================


def get_settings() -> Settings:
    """Предоставляет application settings.

    Returns:
        Settings instance.

    """
    return settings


# ==================== Storage Dependencies ====================


async def get_task_store(request: Request) -> TaskStore:
    """Получить хранилище задач из состояния приложения.

    Хранилище создаётся в lifespan и кладётся в app.state.

    Args:
        request: HTTP запрос FastAPI.

    Returns:
        Экземпляр TaskStore.

    """
    return request.app.state.task_store


# ==================== Service Dependencies ====================


def get_task_service(
    store: Annotated[TaskStore, Depends(get_task_store)],
) -> TaskService:
    """Предоставляет TaskService для текущего хранилища.

    Args:
        store: Хранилище задач.

    Returns:
        TaskService instance.

    """
    return TaskService(store)


# ==================== Type Aliases ====================
# Используются для более чистого кода в route handlers

SettingsDep = Annotated[Settings, Depends(get_settings)]
TaskStoreDep = Annotated[TaskStore, Depends(get_task_store)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
