"""Task Tracker - API Module.

Главный модуль API с версионированием.
"""

from fastapi import APIRouter

from task_tracker.api.v1.router import router as v1_router
from task_tracker.core.constants import API_PREFIX

# Создаем главный API роутер
router = APIRouter()

# Подключаем роутеры разных версий
router.include_router(v1_router, prefix="/v1")

__all__ = ["router", "API_PREFIX"]
