"""Task Service - жизненный цикл задач.

Правила валидации, слияние частичных обновлений и защита
терминального статуса. Состояние хранит только TaskStore,
переданный при создании сервиса.
"""


from task_tracker.modules.tasks.models import Task, TaskPatch
from task_tracker.modules.tasks.query import PageEnvelope, build_query, to_page_envelope
from task_tracker.modules.tasks.store import TaskStore
from task_tracker.shared.errors import (
    InvalidTaskStateError,
    TaskNotFoundError,
    ValidationError,
)
from task_tracker.shared.logging import LogExecutionTime, get_logger

logger = get_logger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class TaskService:
    """Сервис управления задачами.

    Все операции проверяют входные данные до обращения к хранилищу
    и не перехватывают ошибки хранилища: ConcurrencyConflictError
    и ServiceUnavailableError уходят вызывающему коду как есть.
    """

    def __init__(self, store: TaskStore) -> None:
        """Инициализация сервиса.

        Args:
            store: Хранилище задач.

        """
        self.store = store

    async def create(self, candidate: Task | None) -> Task:
        """Создать задачу.

        Проверки выполняются по порядку, возвращается первая ошибка:
        задача передана, заголовок не пустой, статус задан, срок задан.

        Args:
            candidate: Задача без id.

        Returns:
            Сохранённая задача с id, version и timestamps.

        Raises:
            ValidationError: Если обязательное поле отсутствует.

        """
        if candidate is None:
            raise ValidationError(message="Task must not be null")
        if _is_blank(candidate.title):
            raise ValidationError(
                message="Task title must not be null or empty",
                details={"field": "title"},
            )
        if candidate.status is None:
            raise ValidationError(
                message="Task status must not be null",
                details={"field": "status"},
            )
        if candidate.due_date is None:
            raise ValidationError(
                message="Task due date must not be null",
                details={"field": "dueDate"},
            )

        created = await self.store.insert(candidate)

        logger.info(
            "Задача создана",
            task_id=created.id,
            status=created.status.value if created.status else None,
        )
        return created

    async def get_by_id(self, task_id: int | None) -> Task | None:
        """Получить задачу по id.

        Args:
            task_id: ID задачи.

        Returns:
            Задача или None если не найдена.

        Raises:
            ValidationError: Если id не передан.

        """
        self._require_id(task_id)
        return await self.store.find_by_id(task_id)

    async def update(self, task_id: int | None, patch: TaskPatch) -> Task:
        """Частично обновить задачу.

        Порядок: проверка id -> загрузка -> защита терминального статуса ->
        слияние полей -> сохранение. Непереданные поля не меняются.

        Args:
            task_id: ID задачи.
            patch: Частичное обновление.

        Returns:
            Сохранённая задача.

        Raises:
            ValidationError: Если id не передан.
            TaskNotFoundError: Если задачи нет.
            InvalidTaskStateError: Попытка вывести задачу из COMPLETED.
            ConcurrencyConflictError: Задача изменена параллельно.

        """
        self._require_id(task_id)

        existing = await self.store.find_by_id(task_id)
        if existing is None:
            raise TaskNotFoundError(task_id)

        requested_status = patch.provided_value("status")
        if (
            existing.status is not None
            and existing.status.is_terminal
            and requested_status is not None
            and requested_status is not existing.status
        ):
            logger.warning(
                "Запрещённый переход статуса",
                task_id=task_id,
                current_status=existing.status.value,
                requested_status=requested_status.value,
            )
            raise InvalidTaskStateError(task_id, existing.status, requested_status)

        merged = existing.model_copy(update=self._merge_fields(patch))
        updated = await self.store.save(merged)

        logger.info(
            "Задача обновлена",
            task_id=task_id,
            fields=sorted(patch.model_fields_set),
            version=updated.version,
        )
        return updated

    async def delete(self, task_id: int | None) -> None:
        """Удалить задачу.

        Args:
            task_id: ID задачи.

        Raises:
            ValidationError: Если id не передан.
            TaskNotFoundError: Если задачи нет.

        """
        self._require_id(task_id)

        if not await self.store.exists_by_id(task_id):
            raise TaskNotFoundError(task_id)

        await self.store.delete_by_id(task_id)
        logger.info("Задача удалена", task_id=task_id)

    async def list_page(
        self,
        page: int | None = None,
        size: int | None = None,
        sort_by: str | None = None,
        direction: str | None = None,
    ) -> PageEnvelope:
        """Получить страницу задач.

        Args:
            page: Номер страницы.
            size: Размер страницы.
            sort_by: Поле сортировки.
            direction: Направление сортировки.

        Returns:
            PageEnvelope с задачами и метаданными.

        Raises:
            ValidationError: При недопустимых параметрах пагинации.

        """
        query = build_query(page, size, sort_by, direction)

        with LogExecutionTime(
            "tasks.find_page",
            page=query.page,
            size=query.size,
            sort_by=query.sort_by.value,
            direction=query.direction.value,
        ):
            raw = await self.store.find_page(query)

        return to_page_envelope(raw, query)

    @staticmethod
    def _merge_fields(patch: TaskPatch) -> dict[str, object]:
        """Собрать изменения из патча.

        - title: только непустое значение
        - description: любое переданное значение, включая "" и null
        - status, due_date: только не-null значение
        """
        changes: dict[str, object] = {}

        if patch.is_provided("title") and not _is_blank(patch.title):
            changes["title"] = patch.title
        if patch.is_provided("description"):
            changes["description"] = patch.description
        if patch.provided_value("status") is not None:
            changes["status"] = patch.status
        if patch.provided_value("due_date") is not None:
            changes["due_date"] = patch.due_date

        return changes

    @staticmethod
    def _require_id(task_id: int | None) -> None:
        if task_id is None:
            raise ValidationError(
                message="Task id must not be null",
                details={"field": "id"},
            )
