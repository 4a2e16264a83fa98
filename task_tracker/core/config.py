"""Task Tracker - Configuration.

Настройки читаются из окружения (префикс TASK_TRACKER__, вложенные группы
через "__") и из .env файла.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    """Настройки сервера (Uvicorn)."""

    host: str = Field(default="0.0.0.0", description="Хост")
    port: int = Field(default=8080, ge=1, le=65535, description="Порт")
    reload: bool = Field(default=False, description="Режим автоперезагрузки")


class RedisSettings(BaseModel):
    """Настройки Redis."""

    host: str = Field(default="localhost", description="Redis хост")
    port: int = Field(default=6379, description="Redis порт")
    db: int = Field(default=0, ge=0, le=15, description="Redis database index")
    password: str | None = Field(default=None, description="Redis пароль")
    pool_max: int = Field(default=50, ge=1, description="Максимальный размер пула")

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str | None) -> str | None:
        """Пустой пароль трактуется как отсутствие пароля."""
        if not value:
            return None
        return value

    @property
    def url(self) -> str:
        """URL для подключения к Redis.

        Returns:
            Строка подключения для Redis.

        """
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


class StorageSettings(BaseModel):
    """Настройки хранилища задач."""

    backend: Literal["memory", "redis"] = Field(
        default="redis",
        description="Реализация хранилища задач",
    )
    key_prefix: str = Field(
        default="task_tracker:",
        description="Префикс ключей Redis",
    )


class LogSettings(BaseModel):
    """Настройки логирования."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Уровень логирования",
    )
    format: Literal["json", "text"] = Field(
        default="text",
        description="Формат логов",
    )
    file_path: str | None = Field(
        default=None,
        description="Путь к файлу логов (None - без записи в файл)",
    )
    rotation: str = Field(
        default="10 MB",
        description="Ротация логов",
    )
    retention: str = Field(
        default="10 days",
        description="Время хранения логов",
    )


class Settings(BaseSettings):
    """Главные настройки приложения.

    Все настройки загружаются из переменных окружения с префиксом TASK_TRACKER__.
    Пример: TASK_TRACKER__STORAGE__BACKEND=memory
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        env_prefix="TASK_TRACKER__",
        extra="ignore",
    )

    app_name: str = Field(default="Task Tracker", description="Название приложения")
    environment: Literal["local", "dev", "prod"] = Field(
        default="local",
        description="Окружение",
    )
    debug: bool = Field(default=False, description="Режим отладки")

    server: ServerSettings = Field(default_factory=ServerSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    cors_allowed_origins: list[str] = Field(
        default=["*"],
        description="Разрешённые origins для CORS",
    )


# Глобальный объект настроек (singleton)
settings = Settings()
