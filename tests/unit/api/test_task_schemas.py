"""Unit tests for task request schemas."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from api.v1.schemas import task as task_schemas
from api.v1.schemas.task import TaskCreate, TaskUpdate
from domain.entities.task import Task, TaskCategory, TaskPriority


@pytest.fixture
def late_evening_utc(monkeypatch: pytest.MonkeyPatch) -> datetime:
    """Pin the schema clock to the last minutes of a UTC day."""
    now = datetime(2099, 1, 1, 23, 50, tzinfo=timezone.utc)
    monkeypatch.setattr(task_schemas, "utc_now", lambda: now)
    return now


class TestDueDateNotInPast:
    def test_rejects_day_before_utc_today(self, late_evening_utc: datetime) -> None:
        with pytest.raises(ValidationError, match="Due date cannot be in the past"):
            TaskCreate(description="Late", due_date=date(2098, 12, 31))

    def test_accepts_utc_today(self, late_evening_utc: datetime) -> None:
        body = TaskCreate(description="Today", due_date=date(2099, 1, 1))

        assert body.due_date == date(2099, 1, 1)

    def test_update_uses_the_same_day(self, late_evening_utc: datetime) -> None:
        with pytest.raises(ValidationError):
            TaskUpdate(due_date=date(2098, 12, 31))
        assert TaskUpdate(due_date=date(2099, 1, 1)).due_date == date(2099, 1, 1)

    def test_accepted_due_date_is_not_overdue_at_that_moment(
        self, late_evening_utc: datetime
    ) -> None:
        body = TaskCreate(description="Today", due_date=date(2099, 1, 1))
        task = Task(
            id="task_1",
            description=body.description,
            priority=TaskPriority.MEDIUM,
            category=TaskCategory.OTHER,
            created_at=late_evening_utc,
            due_date=body.due_date,
        )

        assert task.is_overdue(late_evening_utc) is False

    def test_missing_due_date_is_allowed(self, late_evening_utc: datetime) -> None:
        assert TaskCreate(description="Whenever").due_date is None
