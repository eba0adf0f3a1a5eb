"""Filtering and display ordering of tasks."""

from collections.abc import Iterable
from datetime import date

from domain.entities.task import ALL, Task, TaskFilters, TaskStatus


def _is_restricted(value: object) -> bool:
    return value is not None and value != ALL


def matches(task: Task, filters: TaskFilters) -> bool:
    """Return True if ``task`` passes every active filter."""
    if _is_restricted(filters.status) and task.status != filters.status:
        return False
    if _is_restricted(filters.priority) and task.priority != filters.priority:
        return False
    if _is_restricted(filters.category) and task.category != filters.category:
        return False
    if filters.search_query:
        if filters.search_query.lower() not in task.description.lower():
            return False
    return True


def task_sort_key(task: Task) -> tuple[int, int, int, date, float]:
    """Display order: pending first, then priority, then due date, then newest.

    Tasks with a due date come before tasks without one, earlier dates first.
    The final tiebreak puts the most recently created task first.
    """
    has_due = task.due_date is not None
    return (
        0 if task.status == TaskStatus.PENDING else 1,
        task.priority.rank,
        0 if has_due else 1,
        task.due_date or date.min,
        -task.created_at.timestamp(),
    )


def apply_filters_and_sort(tasks: Iterable[Task], filters: TaskFilters | None = None) -> list[Task]:
    """Return the filtered subset of ``tasks`` in display order.

    The input is not modified. Ties under the full ordering keep their
    original relative order.
    """
    filters = filters or TaskFilters()
    return sorted((t for t in tasks if matches(t, filters)), key=task_sort_key)
