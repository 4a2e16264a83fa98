"""Task Tracker - Modules.

Доменные модули приложения.
"""
