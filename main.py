"""Task Tracker - Entry Point.

Запускает FastAPI приложение через uvicorn.
"""

import uvicorn

from task_tracker.core.config import settings


def main() -> None:
    """Запустить Task Tracker."""
    uvicorn.run(
        "task_tracker.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload or settings.debug,  # Auto-reload только в debug
        log_level=settings.log.level.lower(),
        access_log=settings.debug,
    )


if __name__ == "__main__":
    main()
