"""Redis Task Store для Task Tracker.

Redis wrapper для хранения задач с optimistic locking.

Redis Schema:
    {prefix}task:{id}     -> Hash (id, version, title, description, status, due_date, ...)
    {prefix}tasks:seq     -> String (последний выданный id)
    {prefix}tasks:index   -> Sorted Set (member = id, score = id)

save() выполняет compare-and-set версии в транзакции WATCH/MULTI/EXEC.
"""

from typing import Any

from redis.asyncio import Redis
from redis.exceptions import WatchError

from task_tracker.core.config import Settings
from task_tracker.core.constants import (
    INITIAL_TASK_VERSION,
    REDIS_TASK_INDEX_KEY,
    REDIS_TASK_PREFIX,
    REDIS_TASK_SEQUENCE_KEY,
)
from task_tracker.modules.tasks.models import Task, TaskSlice
from task_tracker.modules.tasks.query import PageQuery, SortField
from task_tracker.modules.tasks.store import sort_tasks, utcnow
from task_tracker.shared.errors import (
    ConcurrencyConflictError,
    ServiceUnavailableError,
    TaskNotFoundError,
    map_store_errors,
)
from task_tracker.shared.logging import get_logger

logger = get_logger(__name__)


class RedisTaskStore:
    """Redis-based хранилище задач.

    Обеспечивает:
    - Выдачу монотонных id через INCR
    - Optimistic locking по полю version
    - Постраничное чтение с сортировкой
    """

    def __init__(self, redis_client: Redis, key_prefix: str = "") -> None:
        """Инициализировать Task Store.

        Args:
            redis_client: Async Redis client (decode_responses=True)
            key_prefix: Префикс всех ключей

        """
        self.redis = redis_client
        self.key_prefix = key_prefix

    @property
    def _sequence_key(self) -> str:
        return f"{self.key_prefix}{REDIS_TASK_SEQUENCE_KEY}"

    @property
    def _index_key(self) -> str:
        return f"{self.key_prefix}{REDIS_TASK_INDEX_KEY}"

    def _task_key(self, task_id: int) -> str:
        """Получить ключ для задачи."""
        return f"{self.key_prefix}{REDIS_TASK_PREFIX}{task_id}"

    @staticmethod
    def _serialize(task: Task) -> dict[str, str]:
        """Преобразовать задачу в mapping для HSET.

        Отсутствующее описание не записывается, пустое - записывается.
        """
        data = task.model_dump(mode="json", exclude_none=True)
        return {key: str(value) for key, value in data.items()}

    @staticmethod
    def _deserialize(data: dict[str, Any]) -> Task:
        """Собрать задачу из HGETALL."""
        return Task.model_validate(data)

    @map_store_errors
    async def insert(self, task: Task) -> Task:
        """Сохранить новую задачу.

        Args:
            task: Задача без id

        Returns:
            Задача с назначенными id, version и timestamps

        """
        task_id = int(await self.redis.incr(self._sequence_key))
        now = utcnow()
        stored = task.model_copy(
            update={
                "id": task_id,
                "version": INITIAL_TASK_VERSION,
                "created_at": now,
                "updated_at": now,
            }
        )

        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.hset(self._task_key(task_id), mapping=self._serialize(stored))
            pipe.zadd(self._index_key, {str(task_id): task_id})
            await pipe.execute()

        logger.debug("Task записана в Redis", task_id=task_id)
        return stored

    @map_store_errors
    async def find_by_id(self, task_id: int) -> Task | None:
        """Получить задачу.

        Args:
            task_id: ID задачи

        Returns:
            Задача или None если не найдена

        """
        data = await self.redis.hgetall(self._task_key(task_id))
        if not data:
            return None
        return self._deserialize(data)

    @map_store_errors
    async def exists_by_id(self, task_id: int) -> bool:
        return bool(await self.redis.exists(self._task_key(task_id)))

    @map_store_errors
    async def save(self, task: Task) -> Task:
        """Сохранить изменения задачи с проверкой версии.

        Args:
            task: Задача с версией, прочитанной клиентом

        Returns:
            Сохранённая задача с version + 1

        Raises:
            TaskNotFoundError: Задача удалена
            ConcurrencyConflictError: Версия устарела или ключ изменён во время транзакции

        """
        if task.id is None:
            msg = "Cannot save a task without id"
            raise ValueError(msg)

        key = self._task_key(task.id)

        async with self.redis.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(key)

                raw_version = await pipe.hget(key, "version")
                if raw_version is None:
                    raise TaskNotFoundError(task.id)

                current_version = int(raw_version)
                if current_version != task.version:
                    raise ConcurrencyConflictError(
                        task.id,
                        expected_version=task.version,
                        actual_version=current_version,
                    )

                stored = task.model_copy(
                    update={"version": current_version + 1, "updated_at": utcnow()}
                )

                # Пересоздаём hash целиком, чтобы удалённые поля не оставались в записи
                pipe.multi()
                pipe.delete(key)
                pipe.hset(key, mapping=self._serialize(stored))
                await pipe.execute()

            except WatchError as e:
                logger.warning("Task изменена во время транзакции", task_id=task.id)
                raise ConcurrencyConflictError(task.id, expected_version=task.version) from e

        logger.debug("Task обновлена в Redis", task_id=task.id, version=stored.version)
        return stored

    @map_store_errors
    async def delete_by_id(self, task_id: int) -> None:
        """Удалить задачу и убрать её из индекса.

        Args:
            task_id: ID задачи

        """
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(self._task_key(task_id))
            pipe.zrem(self._index_key, str(task_id))
            await pipe.execute()

        logger.debug("Task удалена из Redis", task_id=task_id)

    @map_store_errors
    async def find_page(self, query: PageQuery) -> TaskSlice:
        """Получить страницу задач.

        Сортировка по id выполняется средствами Sorted Set,
        по остальным полям - в памяти после чтения всех задач.

        Args:
            query: Проверенный запрос страницы

        Returns:
            TaskSlice с элементами страницы и общим количеством

        """
        if query.sort_by is SortField.ID:
            total = int(await self.redis.zcard(self._index_key))
            ids = await self.redis.zrange(
                self._index_key,
                query.offset,
                query.offset + query.size - 1,
                desc=query.descending,
            )
            return TaskSlice(items=await self._load_many(ids), total_elements=total)

        ids = await self.redis.zrange(self._index_key, 0, -1)
        ordered = sort_tasks(await self._load_many(ids), query)
        return TaskSlice(
            items=ordered[query.offset : query.offset + query.size],
            total_elements=len(ordered),
        )

    async def _load_many(self, ids: list[str]) -> list[Task]:
        """Прочитать задачи по списку id одним pipeline.

        Задачи, удалённые между чтением индекса и hash, пропускаются.
        """
        if not ids:
            return []

        async with self.redis.pipeline(transaction=False) as pipe:
            for task_id in ids:
                pipe.hgetall(self._task_key(int(task_id)))
            rows = await pipe.execute()

        return [self._deserialize(row) for row in rows if row]

    async def health_check(self) -> bool:
        """Проверить доступность Redis.

        Returns:
            True если Redis доступен

        """
        try:
            await self.redis.ping()
            return True
        except Exception as e:
            logger.error("Redis недоступен", error=str(e))
            return False

    async def cleanup(self) -> None:
        """Закрыть соединение с Redis."""
        await self.redis.aclose()
        logger.info("Redis соединение закрыто")


async def create_redis_task_store(settings: Settings) -> RedisTaskStore:
    """Создать RedisTaskStore с подключением к Redis.

    Args:
        settings: Настройки приложения

    Returns:
        Настроенный RedisTaskStore instance

    Raises:
        ServiceUnavailableError: Если Redis недоступен

    """
    redis_client = Redis.from_url(
        settings.redis.url,
        decode_responses=True,
        max_connections=settings.redis.pool_max,
    )

    store = RedisTaskStore(redis_client, key_prefix=settings.storage.key_prefix)

    if not await store.health_check():
        await redis_client.aclose()
        raise ServiceUnavailableError(
            message=f"Failed to connect to Redis at {settings.redis.host}:{settings.redis.port}",
            details={"operation": "connect"},
        )

    logger.info(
        "RedisTaskStore создан",
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.db,
    )
    return store
