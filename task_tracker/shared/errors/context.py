"""trace_id текущего запроса.

Значение живёт в ContextVar: его выставляет TraceContextMiddleware,
читают обработчики ошибок и loguru patcher.
"""

from contextvars import ContextVar
from uuid import uuid4

trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")


def new_trace_id() -> str:
    """Сгенерировать новый trace_id (uuid4)."""
    return str(uuid4())


def get_trace_id() -> str:
    """Вернуть trace_id запроса.

    Вне запроса (фоновые задачи, тесты) trace_id создаётся лениво
    и запоминается в текущем контексте.

    Returns:
        Строка trace_id.

    """
    trace_id = trace_id_var.get()
    if trace_id:
        return trace_id
    return set_trace_id(new_trace_id())


def set_trace_id(trace_id: str) -> str:
    """Запомнить trace_id в текущем контексте.

    Args:
        trace_id: Значение из заголовка X-Trace-Id или сгенерированное.

    Returns:
        Установленный trace_id.

    """
    trace_id_var.set(trace_id)
    return trace_id
