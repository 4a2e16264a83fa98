"""Tasks Module - жизненный цикл задач.

Включает:
- Models: Task и частичное обновление TaskPatch
- Query: пагинация и сортировка
- Store: контракт хранилища, in-memory и Redis реализации
- Service: TaskService с правилами валидации и переходов статуса
"""

from task_tracker.modules.tasks.models import Task, TaskPatch, TaskSlice
from task_tracker.modules.tasks.query import (
    PageEnvelope,
    PageQuery,
    SortDirection,
    SortField,
    build_query,
    to_page_envelope,
)
from task_tracker.modules.tasks.redis_store import RedisTaskStore, create_redis_task_store
from task_tracker.modules.tasks.service import TaskService
from task_tracker.modules.tasks.store import InMemoryTaskStore, TaskStore

__all__ = [
    # Models
    "Task",
    "TaskPatch",
    "TaskSlice",
    # Query
    "PageQuery",
    "PageEnvelope",
    "SortField",
    "SortDirection",
    "build_query",
    "to_page_envelope",
    # Stores
    "TaskStore",
    "InMemoryTaskStore",
    "RedisTaskStore",
    "create_redis_task_store",
    # Service
    "TaskService",
]
