"""Shared fixtures for unit tests."""

from datetime import date, datetime, timedelta
from itertools import count
from typing import Any

import pytest

from domain.entities.task import (
    Completed,
    Pending,
    Task,
    TaskCategory,
    TaskPriority,
    TaskState,
)
from tests.fakes import FIXED_NOW, TaskFactory


@pytest.fixture
def make_task() -> TaskFactory:
    """Build Task entities directly, bypassing the store.

    Each call gets a distinct id and a creation time one minute after the
    previous one, so later tasks are newer.
    """
    seq = count(1)

    def factory(
        description: str = "Sample task",
        *,
        priority: TaskPriority = TaskPriority.MEDIUM,
        category: TaskCategory = TaskCategory.OTHER,
        due_date: date | None = None,
        completed: bool = False,
        created_at: datetime | None = None,
        **overrides: Any,
    ) -> Task:
        n = next(seq)
        created = created_at or FIXED_NOW - timedelta(days=1) + timedelta(minutes=n)
        state: TaskState = Completed(at=created + timedelta(hours=1)) if completed else Pending()
        return Task(
            id=overrides.pop("id", f"task_{n}"),
            description=description,
            priority=priority,
            category=category,
            created_at=created,
            due_date=due_date,
            state=overrides.pop("state", state),
        )

    return factory
