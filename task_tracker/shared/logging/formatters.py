"""Форматтеры логов для Loguru.

Предоставляет форматтеры для структурированного логирования:
- JSON формат для production (structured logging с trace_id)
- Sanitization для чувствительных данных (credentials)
"""

import re
from typing import Any

import orjson

from task_tracker.core.config import settings

# Паттерны для sanitization чувствительных данных
SENSITIVE_PATTERNS = [
    (re.compile(r'"(password|pwd)"\s*:\s*"[^"]*"', re.IGNORECASE), r'"\1": "***"'),
    (re.compile(r'"(api_key|apikey|secret|token|auth)"\s*:\s*"[^"]*"', re.IGNORECASE), r'"\1": "***"'),
    (re.compile(r"(password|pwd|api_key|apikey|secret|token|auth)=\S+", re.IGNORECASE), r"\1=***"),
    (re.compile(r"redis://:[^@\s]+@", re.IGNORECASE), "redis://:***@"),
]

_SERIALIZED_KEY = "serialized"


def sanitize_sensitive_data(text: str) -> str:
    """Удалить чувствительные данные из строки.

    Заменяет пароли, API ключи, токены и другие credentials на '***'.

    Args:
        text: Текст для sanitization

    Returns:
        Текст с замаскированными чувствительными данными

    """
    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def json_formatter(record: dict[str, Any]) -> str:
    """JSON форматтер для structured logging.

    Loguru ожидает от format-функции шаблон, поэтому готовый JSON
    кладётся в record["extra"] и подставляется через {extra[serialized]}.

    Поля записи:
    - timestamp (ISO 8601)
    - level, logger, function, line
    - message
    - trace_id (добавляется patcher'ом)
    - все поля из logger.bind() или logger.info(..., key=value)
    - exception (тип и значение, если есть)

    Args:
        record: Loguru record dictionary

    Returns:
        Шаблон строки для Loguru

    """
    log_entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
        "message": record["message"],
    }

    for key, value in record["extra"].items():
        if key != _SERIALIZED_KEY:
            log_entry[key] = value

    exception = record["exception"]
    if exception is not None:
        log_entry["exception"] = {
            "type": exception.type.__name__ if exception.type else None,
            "value": str(exception.value) if exception.value else None,
        }

    json_str = orjson.dumps(log_entry, default=str).decode("utf-8")

    if settings.environment == "prod":
        json_str = sanitize_sensitive_data(json_str)

    record["extra"][_SERIALIZED_KEY] = json_str
    return "{extra[" + _SERIALIZED_KEY + "]}\n"
