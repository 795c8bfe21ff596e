"""Pytest configuration and fixtures."""

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from structlog.testing import capture_logs

from taskplan.models.schedule import TaskDescriptor

MakeTask = Callable[..., TaskDescriptor]


@pytest.fixture(autouse=True)
def captured_logs() -> Iterator[list[dict[str, Any]]]:
    """Capture structlog events instead of printing them."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def make_task() -> MakeTask:
    """Return a factory for task descriptors."""

    def _make(
        title: str,
        hours: float = 1,
        deps: list[str] | None = None,
        due: str = "",
    ) -> TaskDescriptor:
        return TaskDescriptor(
            title=title,
            estimated_hours=hours,
            due_date=due,
            dependencies=deps or [],
        )

    return _make


@pytest.fixture
def sample_tasks_payload() -> list[dict[str, object]]:
    """Return a small project plan in API (camelCase) form."""
    return [
        {"title": "Deploy", "estimatedHours": 1, "dueDate": "2026-11-30", "dependencies": ["Build", "Test"]},
        {"title": "Build", "estimatedHours": 3, "dueDate": "", "dependencies": ["Design"]},
        {"title": "Test", "estimatedHours": 2, "dueDate": "", "dependencies": ["Build"]},
        {"title": "Design", "estimatedHours": 5, "dueDate": "", "dependencies": []},
        {"title": "Docs", "estimatedHours": 2, "dueDate": "", "dependencies": ["Design"]},
    ]
