"""Enums для Task Tracker.

Централизованное хранилище всех enum'ов проекта.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Статус задачи."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"  # Терминальный статус

    @property
    def is_terminal(self) -> bool:
        """Из терминального статуса переходы запрещены."""
        return self is TaskStatus.COMPLETED


class HealthStatus(str, Enum):
    """Статус здоровья сервиса."""

    UP = "UP"
    DOWN = "DOWN"
