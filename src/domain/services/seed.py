"""Sample data inserted into an empty store on first start."""

from datetime import date, datetime, timedelta, timezone

import structlog

from domain.entities.task import (
    Completed,
    Task,
    TaskCategory,
    TaskDraft,
    TaskPriority,
)
from domain.services.task_store import TaskStore

logger = structlog.get_logger()


def sample_drafts(today: date, now: datetime) -> list[TaskDraft]:
    """The four sample tasks, relative to ``today``/``now``."""
    return [
        TaskDraft(
            description="Complete project documentation",
            priority=TaskPriority.HIGH,
            category=TaskCategory.WORK,
            due_date=today + timedelta(days=2),
        ),
        TaskDraft(
            description="Buy groceries",
            priority=TaskPriority.MEDIUM,
            category=TaskCategory.SHOPPING,
        ),
        TaskDraft(
            description="Review code changes",
            priority=TaskPriority.MEDIUM,
            category=TaskCategory.WORK,
            state=Completed(at=now),
        ),
        TaskDraft(
            description="Schedule dentist appointment",
            priority=TaskPriority.LOW,
            category=TaskCategory.HEALTH,
        ),
    ]


def seed_if_empty(store: TaskStore, now: datetime | None = None) -> list[Task]:
    """Populate ``store`` with the sample tasks if it holds no task at all.

    Tasks go through ``store.add`` so they get ids and timestamps like any
    other. Returns the inserted tasks (empty when the store was not empty).
    """
    if store.load_all():
        return []

    now = now or datetime.now(timezone.utc)
    created = [store.add(draft) for draft in sample_drafts(now.date(), now)]
    logger.info("sample_tasks_seeded", count=len(created), key=store.storage_key)
    return created
