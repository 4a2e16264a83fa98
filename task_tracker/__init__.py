"""Task Tracker - REST сервис учёта задач."""

__version__ = "1.0.0"
