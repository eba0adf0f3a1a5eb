"""Serialization of the task collection to and from its persisted JSON blob.

The blob is a JSON array of records keyed by the persisted field names
(``dueDate``, ``createdAt``, ``completedAt``); absent optional fields are
omitted rather than written as null.
"""

from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from core.exceptions import CorruptTaskDataError
from domain.entities.task import (
    Completed,
    Pending,
    Task,
    TaskCategory,
    TaskPriority,
    TaskStatus,
)


class TaskRecord(BaseModel):
    """Wire shape of one persisted task."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    category: TaskCategory
    due_date: date | None = Field(default=None, alias="dueDate")
    created_at: datetime = Field(alias="createdAt")
    completed_at: datetime | None = Field(default=None, alias="completedAt")

    @classmethod
    def from_entity(cls, task: Task) -> "TaskRecord":
        return cls(
            id=task.id,
            description=task.description,
            status=task.status,
            priority=task.priority,
            category=task.category,
            due_date=task.due_date,
            created_at=task.created_at,
            completed_at=task.completed_at,
        )

    def to_entity(self) -> Task:
        created_at = _as_utc(self.created_at)
        # Records written before completion became a single state can disagree
        # with themselves; status wins.
        if self.status == TaskStatus.COMPLETED:
            state: Pending | Completed = Completed(at=_as_utc(self.completed_at or self.created_at))
        else:
            state = Pending()
        return Task(
            id=self.id,
            description=self.description,
            priority=self.priority,
            category=self.category,
            created_at=created_at,
            due_date=self.due_date,
            state=state,
        )


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so every stored moment is comparable."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


_collection = TypeAdapter(list[TaskRecord])


def encode_tasks(tasks: list[Task]) -> str:
    """Serialize the whole collection into one JSON text blob.

    Raises:
        CorruptTaskDataError: a task holds a value that has no persisted form
            (e.g. a due date that is not a date).
    """
    try:
        records = [TaskRecord.from_entity(t) for t in tasks]
        blob = _collection.dump_json(records, by_alias=True, exclude_none=True)
    except ValidationError as e:
        raise CorruptTaskDataError(f"cannot encode: {e.error_count()} invalid field(s)") from e
    except PydanticSerializationError as e:
        raise CorruptTaskDataError(f"cannot encode: {e}") from e
    return blob.decode("utf-8")


def decode_tasks(blob: str) -> list[Task]:
    """Parse a blob written by ``encode_tasks``.

    Raises:
        CorruptTaskDataError: the blob is not a JSON array of valid records.
    """
    try:
        records = _collection.validate_json(blob)
    except ValidationError as e:
        raise CorruptTaskDataError(f"{e.error_count()} validation error(s)") from e
    return [r.to_entity() for r in records]
