"""Shared errors module.

Система обработки ошибок приложения.
"""

from task_tracker.shared.errors.base import AppException
from task_tracker.shared.errors.context import get_trace_id, set_trace_id, trace_id_var
from task_tracker.shared.errors.decorators import map_store_errors
from task_tracker.shared.errors.domain_errors import (
    ConcurrencyConflictError,
    ConflictError,
    InternalServerError,
    InvalidTaskStateError,
    NotFoundError,
    ServiceUnavailableError,
    TaskNotFoundError,
    ValidationError,
)
from task_tracker.shared.errors.handlers import setup_exception_handlers
from task_tracker.shared.errors.mapping import ExceptionMapper, map_exception
from task_tracker.shared.errors.schemas import ErrorDetail, ErrorResponse

__all__ = [
    # Base
    "AppException",
    # Context
    "trace_id_var",
    "get_trace_id",
    "set_trace_id",
    # Domain errors
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ServiceUnavailableError",
    "InternalServerError",
    "TaskNotFoundError",
    "InvalidTaskStateError",
    "ConcurrencyConflictError",
    # Handlers
    "setup_exception_handlers",
    # Mapping
    "ExceptionMapper",
    "map_exception",
    "map_store_errors",
    # Schemas
    "ErrorDetail",
    "ErrorResponse",
]
