"""Task Tracker - Health Check Endpoints.

Endpoints для проверки здоровья сервиса и probes для оркестратора.
"""

from fastapi import APIRouter, Response, status
from loguru import logger

from task_tracker.api.schemas import HealthResponse, ProbeResponse
from task_tracker.core.constants import API_VERSION
from task_tracker.core.dependencies import SettingsDep, TaskStoreDep
from task_tracker.core.enums import HealthStatus

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Проверяет здоровье сервиса и хранилища задач",
    status_code=status.HTTP_200_OK,
)
async def health_check(
    response: Response,
    settings: SettingsDep,
    store: TaskStoreDep,
) -> HealthResponse:
    """Выполняет проверку здоровья сервиса.

    Args:
        response: HTTP ответ (для выставления статус кода).
        settings: Settings instance.
        store: Хранилище задач.

    Returns:
        Статус сервиса и его компонентов.

    """
    logger.debug("Health check requested")

    store_status = HealthStatus.UP if await store.health_check() else HealthStatus.DOWN
    if store_status is HealthStatus.DOWN:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status=store_status,
        service=settings.app_name,
        version=API_VERSION,
        environment=settings.environment,
        storage=type(store).__name__,
        components={"task_store": store_status},
    )


@router.get(
    "/liveness",
    response_model=ProbeResponse,
    summary="Liveness probe",
    description="Процесс жив и обрабатывает запросы",
)
async def liveness() -> ProbeResponse:
    return ProbeResponse(status=HealthStatus.UP)


@router.get(
    "/readiness",
    response_model=ProbeResponse,
    summary="Readiness probe",
    description="Сервис готов принимать трафик (хранилище доступно)",
    responses={503: {"model": ProbeResponse, "description": "Хранилище недоступно"}},
)
async def readiness(response: Response, store: TaskStoreDep) -> ProbeResponse:
    """Проверяет готовность сервиса.

    Args:
        response: HTTP ответ (для выставления статус кода).
        store: Хранилище задач.

    Returns:
        UP если хранилище доступно, иначе DOWN с кодом 503.

    """
    if await store.health_check():
        return ProbeResponse(status=HealthStatus.UP)

    logger.warning("Readiness probe failed: task store unavailable")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ProbeResponse(status=HealthStatus.DOWN)
