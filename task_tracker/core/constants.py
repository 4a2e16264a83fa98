"""Константы для Task Tracker.

Централизованное хранилище всех магических чисел и строк.
"""

# === HTTP и API ===
API_PREFIX = "/api"
API_VERSION = "1.0.0"

# === Пагинация ===
DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 20
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

# === Версия записи ===
INITIAL_TASK_VERSION = 0

# === Redis Keys ===
REDIS_TASK_PREFIX = "task:"
REDIS_TASK_SEQUENCE_KEY = "tasks:seq"
REDIS_TASK_INDEX_KEY = "tasks:index"
