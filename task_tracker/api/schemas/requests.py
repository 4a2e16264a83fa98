"""Request Schemas для Task Tracker API.

Pydantic models для входящих запросов. Поля JSON в camelCase.

Обязательность полей проверяет TaskService, поэтому схемы допускают
отсутствие любого поля: клиент получает сообщение сервиса
("Task title must not be null or empty"), а не общую ошибку парсинга.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from task_tracker.core.enums import TaskStatus
from task_tracker.modules.tasks import Task, TaskPatch


class TaskCreateRequest(BaseModel):
    """Запрос на создание задачи.

    POST /api/v1/tasks
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "title": "Buy milk",
                    "description": "2 litres",
                    "status": "PENDING",
                    "dueDate": "2030-01-01T00:00:00",
                }
            ]
        },
    )

    title: str | None = Field(default=None, description="Заголовок задачи")
    description: str | None = Field(default=None, description="Описание")
    status: TaskStatus | None = Field(default=None, description="Статус задачи")
    due_date: datetime | None = Field(
        default=None,
        alias="dueDate",
        description="Срок выполнения (ISO 8601)",
    )

    def to_task(self) -> Task:
        """Преобразовать запрос в Task без id."""
        return Task(
            title=self.title,
            description=self.description,
            status=self.status,
            due_date=self.due_date,
        )


class TaskUpdateRequest(BaseModel):
    """Запрос на частичное обновление задачи.

    PATCH /api/v1/tasks/{task_id}

    Отсутствующее поле не меняется. Явный null для description
    очищает описание, для остальных полей игнорируется.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"status": "IN_PROGRESS"},
                {"description": ""},
            ]
        },
    )

    title: str | None = Field(default=None, description="Новый заголовок")
    description: str | None = Field(default=None, description="Новое описание")
    status: TaskStatus | None = Field(default=None, description="Новый статус")
    due_date: datetime | None = Field(
        default=None,
        alias="dueDate",
        description="Новый срок выполнения (ISO 8601)",
    )

    def to_patch(self) -> TaskPatch:
        """Преобразовать запрос в TaskPatch, сохранив набор переданных полей."""
        return TaskPatch(**self.model_dump(exclude_unset=True))
