"""Фикстуры для API тестов."""

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from task_tracker.core.dependencies import get_task_store
from task_tracker.main import app
from task_tracker.modules.tasks import InMemoryTaskStore


@pytest.fixture
async def client(memory_store: InMemoryTaskStore) -> AsyncIterator[AsyncClient]:
    """Test client поверх in-memory хранилища.

    Lifespan не запускается: хранилище подставляется через dependency_overrides.
    Ошибки приложения не пробрасываются в тест, чтобы проверять 500 ответы.
    """
    app.dependency_overrides[get_task_store] = lambda: memory_store

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def failing_store() -> MagicMock:
    """Хранилище, все операции которого можно настроить на ошибку."""
    store = MagicMock()
    store.insert = AsyncMock()
    store.find_by_id = AsyncMock(return_value=None)
    store.exists_by_id = AsyncMock(return_value=False)
    store.save = AsyncMock()
    store.delete_by_id = AsyncMock()
    store.find_page = AsyncMock()
    store.health_check = AsyncMock(return_value=False)
    return store


@pytest.fixture
async def failing_client(failing_store: MagicMock) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_task_store] = lambda: failing_store

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
