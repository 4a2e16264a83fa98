"""Pytest configuration для unit тестов."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from task_tracker.modules.tasks import InMemoryTaskStore, TaskService


@pytest.fixture
def mock_redis() -> MagicMock:
    """Mock Redis client для тестирования."""
    redis = MagicMock()
    redis.incr = AsyncMock(return_value=1)
    redis.hgetall = AsyncMock(return_value={})
    redis.exists = AsyncMock(return_value=0)
    redis.zcard = AsyncMock(return_value=0)
    redis.zrange = AsyncMock(return_value=[])
    redis.ping = AsyncMock(return_value=True)
    redis.aclose = AsyncMock()
    return redis


@pytest.fixture
def mock_pipeline(mock_redis: MagicMock) -> MagicMock:
    """Mock Redis pipeline, возвращаемый mock_redis.pipeline().

    Команды в транзакции буферизуются (sync), watch/hget до multi()
    и execute - awaitable.
    """
    pipe = MagicMock()
    pipe.__aenter__ = AsyncMock(return_value=pipe)
    pipe.__aexit__ = AsyncMock(return_value=False)
    pipe.watch = AsyncMock()
    pipe.hget = AsyncMock(return_value="0")
    pipe.execute = AsyncMock(return_value=[])
    mock_redis.pipeline = MagicMock(return_value=pipe)
    return pipe


@pytest.fixture
def memory_store() -> InMemoryTaskStore:
    """Пустое in-memory хранилище."""
    return InMemoryTaskStore()


@pytest.fixture
def task_service(memory_store: InMemoryTaskStore) -> TaskService:
    """TaskService поверх in-memory хранилища."""
    return TaskService(memory_store)
