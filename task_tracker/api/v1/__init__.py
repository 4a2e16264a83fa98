"""API v1 - роутеры первой версии API."""
