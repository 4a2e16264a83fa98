"""Общие фикстуры и маркеры тестов Task Tracker."""

import pytest

from task_tracker.tests.factories import make_task


@pytest.fixture
def task_factory():
    """Фабрика задач-кандидатов."""
    return make_task


def pytest_configure(config):
    """
    Регистрация маркеров
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires running services)",
    )
    config.addinivalue_line(
        "markers",
        "requires_redis: marks tests that require Redis to be running",
    )
