"""Task Tracker - Core module.

Ядро приложения: конфигурация, константы, перечисления.
"""

from task_tracker.core.config import settings
from task_tracker.core.constants import (
    API_PREFIX,
    API_VERSION,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)

__all__ = [
    "settings",
    "API_PREFIX",
    "API_VERSION",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
]
