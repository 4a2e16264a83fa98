"""Task Tracker Service - Main Entry Point.

Главная точка входа приложения.
"""

import time
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from task_tracker.api import router as api_router
from task_tracker.core.config import Settings, settings
from task_tracker.core.constants import API_PREFIX, API_VERSION
from task_tracker.modules.tasks import InMemoryTaskStore, TaskStore, create_redis_task_store
from task_tracker.shared.errors import ServiceUnavailableError, setup_exception_handlers
from task_tracker.shared.errors.context import get_trace_id, new_trace_id, set_trace_id
from task_tracker.shared.logging import setup_logger


class TraceContextMiddleware:
    """Middleware для установки trace_id в контекст запроса."""

    def __init__(self, app: Any) -> None:
        """Инициализация middleware.

        Args:
            app: FastAPI приложение.

        """
        self.app = app

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        """Обработка запроса с установкой trace_id.

        Args:
            scope: ASGI scope.
            receive: ASGI receive callable.
            send: ASGI send callable.

        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Берём trace_id клиента или генерируем новый
        headers = dict(scope.get("headers", []))
        trace_id = headers.get(b"x-trace-id", b"").decode("latin-1") or new_trace_id()

        set_trace_id(trace_id)

        scope.setdefault("state", {})
        scope["state"]["trace_id"] = trace_id

        await self.app(scope, receive, send)


async def create_task_store(app_settings: Settings) -> TaskStore:
    """Создать хранилище задач по настройкам.

    Вне production недоступный Redis заменяется in-memory хранилищем.

    Args:
        app_settings: Настройки приложения.

    Returns:
        Готовое к работе хранилище.

    Raises:
        ServiceUnavailableError: Redis недоступен в production.

    """
    if app_settings.storage.backend == "memory":
        logger.info("Используется in-memory хранилище задач")
        return InMemoryTaskStore()

    logger.info(
        "Подключение к Redis...",
        host=app_settings.redis.host,
        port=app_settings.redis.port,
    )
    try:
        store = await create_redis_task_store(app_settings)
    except ServiceUnavailableError as e:
        if app_settings.environment == "prod":
            logger.error("Redis критичен для production - приложение не будет запущено")
            raise
        logger.warning(
            "Redis недоступен, используется in-memory хранилище (development mode)",
            error=e.message,
        )
        return InMemoryTaskStore()

    logger.success("Redis подключен успешно")
    return store


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Менеджер жизненного цикла приложения.

    Создаёт хранилище задач при запуске и закрывает его при остановке.

    Args:
        app: Экземпляр FastAPI приложения.

    Yields:
        Управление приложением во время его работы.

    """
    logger.info("Запуск сервиса", app_name=settings.app_name)
    logger.info("Окружение", environment=settings.environment, debug=settings.debug)

    try:
        app.state.task_store = await create_task_store(settings)
    except Exception as e:
        logger.error("Критическая ошибка при запуске приложения", error=str(e))
        raise

    logger.success("Сервис запущен", storage=type(app.state.task_store).__name__)
    logger.info(
        "API доступен",
        url=f"http://{settings.server.host}:{settings.server.port}{API_PREFIX}",
    )

    try:
        yield
    finally:
        logger.info("Завершение работы приложения...")
        try:
            await app.state.task_store.cleanup()
        except Exception as e:
            logger.error("Ошибка при закрытии хранилища", error=str(e))
        logger.success("Завершение работы выполнено")


def create_app() -> FastAPI:
    """Создание и настройка FastAPI приложения.

    Создает экземпляр FastAPI с настроенными:
    - Middleware (CORS, timing, trace_id)
    - Exception handlers
    - API роутерами

    Returns:
        Настроенный экземпляр FastAPI приложения.

    """
    # Инициализируем логирование перед созданием приложения
    setup_logger()

    app = FastAPI(
        title=settings.app_name,
        description="REST сервис учёта задач: создание, списки, частичное обновление",
        version=API_VERSION,
        lifespan=lifespan,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    @app.middleware("http")
    async def timing_middleware(request: Request, call_next: Any) -> Any:
        """Middleware для измерения времени выполнения запросов.

        Args:
            request: Входящий HTTP запрос.
            call_next: Следующий обработчик в цепочке.

        Returns:
            HTTP ответ с добавленными заголовками.

        """
        start_time = time.perf_counter()
        trace_id = get_trace_id()
        request.state.trace_id = trace_id

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Запрос завершился с ошибкой",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)

        response.headers["X-Trace-Id"] = trace_id
        response.headers["X-Duration-Ms"] = str(duration_ms)

        logger.info(
            "HTTP запрос обработан",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Добавляется последним: внешний слой, trace_id известен всем внутренним
    app.add_middleware(TraceContextMiddleware)

    setup_exception_handlers(app)

    app.include_router(api_router, prefix=API_PREFIX)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Корневой endpoint с информацией о сервисе.

        Returns:
            Словарь с информацией о сервисе и доступных endpoints.

        """
        return {
            "service": settings.app_name,
            "version": API_VERSION,
            "environment": settings.environment,
            "status": "running",
            "endpoints": {
                "api": f"{API_PREFIX}/v1",
                "tasks": f"{API_PREFIX}/v1/tasks",
                "health": f"{API_PREFIX}/v1/health",
                "docs": "/docs",
                "redoc": "/redoc",
            },
        }

    return app


def main_uvicorn() -> None:  # pragma: no cover
    """Запуск приложения через Uvicorn."""
    uvicorn.run(
        "task_tracker.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload or settings.debug,
        log_level=settings.log.level.lower(),
        access_log=True,
    )


# Создаем экземпляр приложения для импорта
app = create_app()


if __name__ == "__main__":
    main_uvicorn()
