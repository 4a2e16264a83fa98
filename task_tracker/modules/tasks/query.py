"""Пагинация и сортировка задач.

build_query превращает сырые параметры запроса в проверенный PageQuery,
to_page_envelope оборачивает страницу хранилища в PageEnvelope.
"""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from task_tracker.core.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MIN_PAGE_SIZE,
)
from task_tracker.modules.tasks.models import Task, TaskSlice
from task_tracker.shared.errors import ValidationError


class SortField(str, Enum):
    """Поле сортировки задач."""

    ID = "id"
    TITLE = "title"
    STATUS = "status"
    DUE_DATE = "dueDate"

    @property
    def attribute(self) -> str:
        """Имя атрибута модели Task."""
        return _SORT_FIELD_ATTRIBUTES[self]

    @classmethod
    def parse(cls, value: str | None) -> "SortField":
        """Разобрать поле сортировки без учёта регистра.

        Args:
            value: Значение из запроса (id, title, status, dueDate, due_date).

        Returns:
            SortField, по умолчанию ID.

        Raises:
            ValidationError: Если значение не входит в допустимый набор.

        """
        if value is None or not value.strip():
            return cls.ID

        field = _SORT_FIELD_ALIASES.get(value.strip().lower())
        if field is None:
            allowed = ", ".join(member.value for member in cls)
            raise ValidationError(
                message=f"Invalid sortBy: {value}. Allowed: {allowed}",
                details={"field": "sortBy", "allowed": [member.value for member in cls]},
            )
        return field


class SortDirection(str, Enum):
    """Направление сортировки."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortDirection":
        """Разобрать направление сортировки без учёта регистра.

        Raises:
            ValidationError: Если значение не asc/desc (ascending/descending).

        """
        if value is None or not value.strip():
            return cls.ASC

        direction = _SORT_DIRECTION_ALIASES.get(value.strip().lower())
        if direction is None:
            raise ValidationError(
                message=f"Invalid direction: {value}. Allowed: asc, desc",
                details={"field": "direction", "allowed": ["asc", "desc"]},
            )
        return direction


_SORT_FIELD_ATTRIBUTES = {
    SortField.ID: "id",
    SortField.TITLE: "title",
    SortField.STATUS: "status",
    SortField.DUE_DATE: "due_date",
}

_SORT_FIELD_ALIASES = {
    "id": SortField.ID,
    "title": SortField.TITLE,
    "status": SortField.STATUS,
    "duedate": SortField.DUE_DATE,
    "due_date": SortField.DUE_DATE,
}

_SORT_DIRECTION_ALIASES = {
    "asc": SortDirection.ASC,
    "ascending": SortDirection.ASC,
    "desc": SortDirection.DESC,
    "descending": SortDirection.DESC,
}


class PageQuery(BaseModel):
    """Нормализованный запрос страницы задач."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(ge=0, description="Номер страницы (с нуля)")
    size: int = Field(ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE, description="Размер страницы")
    sort_by: SortField = Field(default=SortField.ID, description="Поле сортировки")
    direction: SortDirection = Field(default=SortDirection.ASC, description="Направление")

    @property
    def offset(self) -> int:
        """Смещение первого элемента страницы."""
        return self.page * self.size

    @property
    def descending(self) -> bool:
        """Сортировка по убыванию."""
        return self.direction is SortDirection.DESC


class PageEnvelope(BaseModel):
    """Страница задач с метаданными пагинации."""

    items: list[Task]
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool


def build_query(
    page: int | None = DEFAULT_PAGE,
    size: int | None = DEFAULT_PAGE_SIZE,
    sort_by: str | None = None,
    direction: str | None = None,
) -> PageQuery:
    """Проверить параметры пагинации и собрать PageQuery.

    Проверки выполняются по порядку, первая неудачная прерывает сборку.

    Args:
        page: Номер страницы (>= 0).
        size: Размер страницы (1..100).
        sort_by: Поле сортировки (id, title, status, dueDate).
        direction: Направление (asc, desc).

    Returns:
        Проверенный PageQuery.

    Raises:
        ValidationError: При недопустимых параметрах.

    """
    page = DEFAULT_PAGE if page is None else page
    size = DEFAULT_PAGE_SIZE if size is None else size

    if page < 0:
        raise ValidationError(
            message="page must be >= 0",
            details={"field": "page"},
        )
    if not MIN_PAGE_SIZE <= size <= MAX_PAGE_SIZE:
        raise ValidationError(
            message=f"size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}",
            details={"field": "size"},
        )

    return PageQuery(
        page=page,
        size=size,
        sort_by=SortField.parse(sort_by),
        direction=SortDirection.parse(direction),
    )


def to_page_envelope(raw: TaskSlice, query: PageQuery) -> PageEnvelope:
    """Обернуть страницу хранилища в PageEnvelope.

    Args:
        raw: Элементы страницы и общее количество задач.
        query: Запрос, по которому получена страница.

    Returns:
        PageEnvelope с метаданными.

    """
    total_pages = math.ceil(raw.total_elements / query.size) if raw.total_elements else 0

    return PageEnvelope(
        items=list(raw.items),
        page=query.page,
        size=query.size,
        total_elements=raw.total_elements,
        total_pages=total_pages,
        first=query.page == 0,
        last=query.page + 1 >= total_pages,
    )
