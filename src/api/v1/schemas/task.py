"""Pydantic schemas for Task API."""

from datetime import date, datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from domain.entities.task import Task, TaskCategory, TaskPriority, TaskStats, TaskStatus
from domain.services.task_store import utc_now

DESCRIPTION_MAX_LENGTH = 200

Description = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=DESCRIPTION_MAX_LENGTH),
]

StatusFilter = Literal["all", "pending", "completed"]
PriorityFilter = Literal["all", "high", "medium", "low"]
CategoryFilter = Literal["all", "work", "personal", "shopping", "health", "education", "other"]


def _not_in_past(value: date | None) -> date | None:
    # Same UTC calendar day that Task.is_overdue compares against.
    if value is not None and value < utc_now().date():
        raise ValueError("Due date cannot be in the past")
    return value


class TaskCreate(BaseModel):
    """Schema for creating a Task."""

    description: Description
    priority: TaskPriority = TaskPriority.MEDIUM
    category: TaskCategory = TaskCategory.OTHER
    due_date: date | None = None

    @field_validator("due_date")
    @classmethod
    def due_date_not_in_past(cls, value: date | None) -> date | None:
        return _not_in_past(value)


class TaskUpdate(BaseModel):
    """Schema for updating a Task (all fields optional).

    ``due_date`` sent as null clears the due date; an omitted field is left
    unchanged.
    """

    description: Description | None = None
    priority: TaskPriority | None = None
    category: TaskCategory | None = None
    due_date: date | None = None
    status: TaskStatus | None = None

    @field_validator("due_date")
    @classmethod
    def due_date_not_in_past(cls, value: date | None) -> date | None:
        return _not_in_past(value)


class TaskResponse(BaseModel):
    """Schema for Task response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "task_1767225600000_k3j9x0a2b",
                "description": "Complete project documentation",
                "status": "pending",
                "priority": "high",
                "category": "work",
                "due_date": "2026-01-03",
                "created_at": "2026-01-01T00:00:00Z",
                "completed_at": None,
                "is_overdue": False,
            }
        },
    )

    id: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    category: TaskCategory
    due_date: date | None
    created_at: datetime
    completed_at: datetime | None
    is_overdue: bool = False

    @classmethod
    def from_entity(cls, task: Task, now: datetime) -> "TaskResponse":
        return cls(
            id=task.id,
            description=task.description,
            status=task.status,
            priority=task.priority,
            category=task.category,
            due_date=task.due_date,
            created_at=task.created_at,
            completed_at=task.completed_at,
            is_overdue=task.is_overdue(now),
        )


class TaskListResponse(BaseModel):
    """Schema for list of Tasks response."""

    data: list[TaskResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class TaskDetailResponse(BaseModel):
    """Schema for single Task response."""

    data: TaskResponse


class TaskStatsResponse(BaseModel):
    """Summary counts over all tasks."""

    total: int
    completed: int
    pending: int
    high_priority: int
    overdue: int

    @classmethod
    def from_stats(cls, stats: TaskStats) -> "TaskStatsResponse":
        return cls(
            total=stats.total,
            completed=stats.completed,
            pending=stats.pending,
            high_priority=stats.high_priority,
            overdue=stats.overdue,
        )


class TaskStatsDetailResponse(BaseModel):
    data: TaskStatsResponse
