"""
Фикстуры для интеграционных тестов.
Использует настоящий Redis (TASK_TRACKER__REDIS__* настройки)
"""

from collections.abc import AsyncIterator
from uuid import uuid4

import pytest
from redis.asyncio import Redis

from task_tracker.core.config import settings
from task_tracker.modules.tasks import RedisTaskStore


@pytest.fixture
async def real_redis() -> AsyncIterator[Redis]:
    """
    РЕАЛЬНЫЙ Redis клиент

    Тест пропускается, если Redis недоступен.
    """
    client = Redis.from_url(settings.redis.url, decode_responses=True)

    try:
        await client.ping()
    except Exception as e:
        await client.aclose()
        pytest.skip(f"Redis is not available: {e}")

    yield client

    await client.aclose()


@pytest.fixture
async def redis_store(real_redis: Redis) -> AsyncIterator[RedisTaskStore]:
    """RedisTaskStore с уникальным префиксом; ключи удаляются после теста."""
    prefix = f"test:{uuid4().hex}:"

    yield RedisTaskStore(real_redis, key_prefix=prefix)

    async for key in real_redis.scan_iter(match=f"{prefix}*"):
        await real_redis.delete(key)
