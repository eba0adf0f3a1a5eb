"""Task domain entity and its value objects."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Literal


class TaskStatus(StrEnum):
    """Whether a task is still open."""

    PENDING = "pending"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    """Importance of a task."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank: high=0 < medium=1 < low=2."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    TaskPriority.HIGH: 0,
    TaskPriority.MEDIUM: 1,
    TaskPriority.LOW: 2,
}


class TaskCategory(StrEnum):
    """Bucket a task is filed under."""

    WORK = "work"
    PERSONAL = "personal"
    SHOPPING = "shopping"
    HEALTH = "health"
    EDUCATION = "education"
    OTHER = "other"


@dataclass(frozen=True)
class Pending:
    """Completion state of an open task."""

    status = TaskStatus.PENDING


@dataclass(frozen=True)
class Completed:
    """Completion state of a finished task, with the moment it was finished."""

    at: datetime
    status = TaskStatus.COMPLETED


# A task is either pending or completed-at-some-time; there is no way to
# carry a completion timestamp on a pending task or drop it from a completed one.
TaskState = Pending | Completed


@dataclass
class Task:
    """Domain entity for a single task."""

    id: str
    description: str
    priority: TaskPriority
    category: TaskCategory
    created_at: datetime
    due_date: date | None = None
    state: TaskState = field(default_factory=Pending)

    @property
    def status(self) -> TaskStatus:
        return self.state.status

    @property
    def completed_at(self) -> datetime | None:
        if isinstance(self.state, Completed):
            return self.state.at
        return None

    @property
    def is_completed(self) -> bool:
        return isinstance(self.state, Completed)

    def is_overdue(self, now: datetime) -> bool:
        """Per-item overdue check used when displaying a task.

        Compares against the start of ``now``'s day, so a task due today is
        never overdue here.
        """
        if self.is_completed or self.due_date is None:
            return False
        return self.due_date < now.date()


@dataclass
class TaskDraft:
    """Everything a caller supplies to create a task (no id, no created_at)."""

    description: str
    priority: TaskPriority = TaskPriority.MEDIUM
    category: TaskCategory = TaskCategory.OTHER
    due_date: date | None = None
    state: TaskState = field(default_factory=Pending)


ALL = "all"


@dataclass(frozen=True)
class TaskFilters:
    """Display filters. ``None`` or ``"all"`` means no restriction."""

    status: TaskStatus | Literal["all"] | None = None
    priority: TaskPriority | Literal["all"] | None = None
    category: TaskCategory | Literal["all"] | None = None
    search_query: str = ""


@dataclass(frozen=True)
class TaskStats:
    """Summary counts over a task collection."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    high_priority: int = 0
    overdue: int = 0
