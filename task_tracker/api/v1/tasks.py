"""Task Tracker - Task Endpoints.

Endpoints для управления задачами (создание, получение, список,
частичное обновление, удаление).
"""

from typing import Annotated

from fastapi import APIRouter, Query, status
from loguru import logger

from task_tracker.api.schemas import (
    TaskCreateRequest,
    TaskPageResponse,
    TaskResponse,
    TaskUpdateRequest,
)
from task_tracker.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from task_tracker.core.dependencies import TaskServiceDep
from task_tracker.shared.errors import (
    InvalidTaskStateError,
    ServiceUnavailableError,
    TaskNotFoundError,
    ValidationError,
)

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать задачу",
    description="Создаёт задачу. Обязательны title, status и dueDate",
    responses={
        400: ValidationError.openapi_response(),
        503: ServiceUnavailableError.openapi_response(),
    },
)
async def create_task(request: TaskCreateRequest, service: TaskServiceDep) -> TaskResponse:
    """Создаёт новую задачу.

    Args:
        request: Запрос на создание задачи.
        service: TaskService instance.

    Returns:
        Созданная задача.

    """
    created = await service.create(request.to_task())
    return TaskResponse.from_task(created)


@router.get(
    "",
    response_model=TaskPageResponse,
    summary="Список задач",
    description="Возвращает страницу задач с сортировкой",
    status_code=status.HTTP_200_OK,
    responses={400: ValidationError.openapi_response()},
)
async def list_tasks(
    service: TaskServiceDep,
    page: Annotated[int | None, Query(description="Номер страницы (с нуля)")] = DEFAULT_PAGE,
    size: Annotated[int | None, Query(description="Размер страницы (1..100)")] = DEFAULT_PAGE_SIZE,
    sort_by: Annotated[
        str | None,
        Query(alias="sortBy", description="Поле сортировки: id, title, status, dueDate"),
    ] = None,
    direction: Annotated[
        str | None,
        Query(description="Направление сортировки: asc, desc"),
    ] = None,
) -> TaskPageResponse:
    """Возвращает страницу задач.

    Args:
        service: TaskService instance.
        page: Номер страницы.
        size: Размер страницы.
        sort_by: Поле сортировки.
        direction: Направление сортировки.

    Returns:
        Страница задач с метаданными пагинации.

    """
    envelope = await service.list_page(page, size, sort_by, direction)
    return TaskPageResponse.from_envelope(envelope)


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Получить задачу",
    description="Возвращает задачу по ID",
    status_code=status.HTTP_200_OK,
    responses={404: TaskNotFoundError.openapi_response()},
)
async def get_task(task_id: int, service: TaskServiceDep) -> TaskResponse:
    """Получает задачу.

    Args:
        task_id: ID задачи.
        service: TaskService instance.

    Returns:
        Информация о задаче.

    Raises:
        TaskNotFoundError: Если задача не найдена.

    """
    logger.debug("Получение задачи", task_id=task_id)

    task = await service.get_by_id(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)

    return TaskResponse.from_task(task)


@router.patch(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Обновить задачу",
    description="Частично обновляет задачу. Непереданные поля не меняются",
    status_code=status.HTTP_200_OK,
    responses={
        400: ValidationError.openapi_response(),
        404: TaskNotFoundError.openapi_response(),
        409: InvalidTaskStateError.openapi_response(),
    },
)
async def update_task(
    task_id: int,
    request: TaskUpdateRequest,
    service: TaskServiceDep,
) -> TaskResponse:
    """Частично обновляет задачу.

    409 возвращается в двух случаях: INVALID_TASK_STATE при попытке
    вывести задачу из COMPLETED и CONCURRENCY_CONFLICT, если задачу
    изменили параллельно. Во втором случае клиент может перечитать
    задачу и повторить запрос.

    Args:
        task_id: ID задачи.
        request: Частичное обновление.
        service: TaskService instance.

    Returns:
        Обновлённая задача.

    Raises:
        TaskNotFoundError: Если задача не найдена.
        InvalidTaskStateError: Запрещённый переход статуса.
        ConcurrencyConflictError: Параллельное изменение.

    """
    updated = await service.update(task_id, request.to_patch())
    return TaskResponse.from_task(updated)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удалить задачу",
    description="Удаляет задачу из хранилища",
    responses={404: TaskNotFoundError.openapi_response()},
)
async def delete_task(task_id: int, service: TaskServiceDep) -> None:
    """Удаляет задачу.

    Args:
        task_id: ID задачи.
        service: TaskService instance.

    Raises:
        TaskNotFoundError: Если задача не найдена.

    """
    await service.delete(task_id)
