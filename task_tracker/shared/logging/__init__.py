"""Модуль структурированного логирования.

Предоставляет единый интерфейс для логирования во всем приложении:
- trace_id запроса в каждой записи
- JSON формат для production structured logging
- Human-readable формат для development

Основное использование:
    >>> from task_tracker.shared.logging import setup_logger, get_logger
    >>> setup_logger()  # Вызвать один раз при старте
    >>> logger = get_logger(__name__)
    >>> logger.info("Test message")  # trace_id добавится автоматически
"""

from task_tracker.shared.logging.config import (
    InterceptHandler,
    configure_third_party_loggers,
    get_logger,
    setup_logger,
    trace_id_patcher,
)
from task_tracker.shared.logging.formatters import (
    json_formatter,
    sanitize_sensitive_data,
)
from task_tracker.shared.logging.helpers import LogExecutionTime

__all__ = [
    "InterceptHandler",
    "LogExecutionTime",
    "configure_third_party_loggers",
    "get_logger",
    "json_formatter",
    "sanitize_sensitive_data",
    "setup_logger",
    "trace_id_patcher",
]
