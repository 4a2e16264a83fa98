"""Response Schemas для Task Tracker API.

Pydantic models для API responses. Поля JSON в camelCase.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from task_tracker.core.enums import HealthStatus, TaskStatus
from task_tracker.modules.tasks import PageEnvelope, Task


class TaskResponse(BaseModel):
    """Ответ с информацией о задаче.

    Используется в:
    - POST /api/v1/tasks (создание задачи)
    - GET /api/v1/tasks/{task_id}
    - PATCH /api/v1/tasks/{task_id}
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(description="ID задачи")
    version: int = Field(description="Версия записи")
    title: str = Field(description="Заголовок")
    description: str | None = Field(default=None, description="Описание")
    status: TaskStatus = Field(description="Статус задачи")
    due_date: datetime = Field(alias="dueDate", description="Срок выполнения")
    created_at: datetime | None = Field(
        default=None, alias="createdAt", description="Timestamp создания"
    )
    updated_at: datetime | None = Field(
        default=None, alias="updatedAt", description="Timestamp последнего обновления"
    )

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls.model_validate(task.model_dump())


class TaskPageResponse(BaseModel):
    """Страница задач.

    GET /api/v1/tasks
    """

    model_config = ConfigDict(populate_by_name=True)

    items: list[TaskResponse] = Field(description="Задачи текущей страницы")
    page: int = Field(description="Номер страницы (с нуля)")
    size: int = Field(description="Размер страницы")
    total_elements: int = Field(alias="totalElements", description="Всего задач")
    total_pages: int = Field(alias="totalPages", description="Всего страниц")
    first: bool = Field(description="Первая страница")
    last: bool = Field(description="Последняя страница")

    @classmethod
    def from_envelope(cls, envelope: PageEnvelope) -> "TaskPageResponse":
        """Собрать ответ из PageEnvelope сервиса.

        Args:
            envelope: Страница задач с метаданными.

        Returns:
            TaskPageResponse

        """
        return cls(
            items=[TaskResponse.from_task(task) for task in envelope.items],
            page=envelope.page,
            size=envelope.size,
            total_elements=envelope.total_elements,
            total_pages=envelope.total_pages,
            first=envelope.first,
            last=envelope.last,
        )


class ProbeResponse(BaseModel):
    """Ответ liveness/readiness probe."""

    status: HealthStatus = Field(description="UP или DOWN")


class HealthResponse(BaseModel):
    """Статус здоровья сервиса.

    GET /api/v1/health
    """

    status: HealthStatus = Field(description="Общий статус")
    service: str = Field(description="Название сервиса")
    version: str = Field(description="Версия API")
    environment: str = Field(description="Окружение")
    storage: str = Field(description="Тип хранилища задач")
    components: dict[str, HealthStatus] = Field(
        default_factory=dict,
        description="Статусы компонентов",
    )
