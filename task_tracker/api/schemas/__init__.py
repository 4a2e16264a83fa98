"""API Schemas - модели запросов и ответов."""

from task_tracker.api.schemas.requests import TaskCreateRequest, TaskUpdateRequest
from task_tracker.api.schemas.responses import (
    HealthResponse,
    ProbeResponse,
    TaskPageResponse,
    TaskResponse,
)

__all__ = [
    # Requests
    "TaskCreateRequest",
    "TaskUpdateRequest",
    # Responses
    "TaskResponse",
    "TaskPageResponse",
    "HealthResponse",
    "ProbeResponse",
]
