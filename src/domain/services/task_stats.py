"""Summary counts over a task collection."""

from collections.abc import Iterable
from datetime import date, datetime, time, timezone

from domain.entities.task import Task, TaskPriority, TaskStats, TaskStatus


def _due_moment(due: date) -> datetime:
    # A bare date is read as midnight UTC of that day.
    return datetime.combine(due, time.min, tzinfo=timezone.utc)


def compute_stats(tasks: Iterable[Task], now: datetime) -> TaskStats:
    """Count tasks by status, outstanding high priority, and overdue.

    ``high_priority`` only counts pending tasks. ``overdue`` counts pending
    tasks whose due date (as midnight UTC) is earlier than ``now`` itself,
    with no start-of-day truncation; a task due today is overdue here as soon
    as the day has started, unlike ``Task.is_overdue``.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    total = completed = pending = high_priority = overdue = 0
    for task in tasks:
        total += 1
        if task.status == TaskStatus.COMPLETED:
            completed += 1
            continue
        pending += 1
        if task.priority == TaskPriority.HIGH:
            high_priority += 1
        if task.due_date is not None and _due_moment(task.due_date) < now:
            overdue += 1

    return TaskStats(
        total=total,
        completed=completed,
        pending=pending,
        high_priority=high_priority,
        overdue=overdue,
    )
