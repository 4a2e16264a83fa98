"""Доменные модели задач.

Task - единственная сущность сервиса. TaskPatch - частичное обновление,
в котором каждое поле может быть не передано, передано как null
или передано со значением.
"""

from datetime import datetime
from typing import NamedTuple

from pydantic import BaseModel, Field

from task_tracker.core.enums import TaskStatus


class Task(BaseModel):
    """Задача.

    До создания id, version и timestamps равны None:
    их назначает хранилище.
    """

    id: int | None = Field(default=None, description="Идентификатор (назначается хранилищем)")
    version: int | None = Field(default=None, description="Версия для optimistic locking")
    title: str | None = Field(default=None, description="Заголовок")
    description: str | None = Field(default=None, description="Описание")
    status: TaskStatus | None = Field(default=None, description="Статус")
    due_date: datetime | None = Field(default=None, description="Срок выполнения")
    created_at: datetime | None = Field(default=None, description="Время создания")
    updated_at: datetime | None = Field(default=None, description="Время последнего обновления")


class TaskPatch(BaseModel):
    """Частичное обновление задачи.

    Переданные поля определяются через model_fields_set, поэтому
    TaskPatch() и TaskPatch(description=None) - разные патчи.
    """

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    due_date: datetime | None = None

    def is_provided(self, field_name: str) -> bool:
        """Было ли поле явно передано в патче (в том числе как null).

        Args:
            field_name: Имя поля.

        Returns:
            True если поле передано.

        """
        return field_name in self.model_fields_set

    def provided_value(self, field_name: str) -> object | None:
        """Значение поля, если оно передано и не равно null."""
        if not self.is_provided(field_name):
            return None
        return getattr(self, field_name)


class TaskSlice(NamedTuple):
    """Страница задач, возвращаемая хранилищем."""

    items: list[Task]
    total_elements: int
