"""Фабрики тестовых данных."""

from datetime import datetime

from task_tracker.core.enums import TaskStatus
from task_tracker.modules.tasks import Task

DUE_DATE = datetime(2030, 1, 1, 0, 0)


def make_task(
    title: str | None = "Buy milk",
    description: str | None = "2 litres",
    status: TaskStatus | None = TaskStatus.PENDING,
    due_date: datetime | None = DUE_DATE,
) -> Task:
    """Собрать задачу-кандидата для создания."""
    return Task(title=title, description=description, status=status, due_date=due_date)
