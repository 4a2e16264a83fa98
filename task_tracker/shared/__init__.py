"""Task Tracker - Shared module.

Общие компоненты: ошибки, логирование.
"""
