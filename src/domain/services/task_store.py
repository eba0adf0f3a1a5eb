"""Task store: the only reader and writer of the persisted task collection."""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

import structlog

from core.exceptions import CorruptTaskDataError, StorageUnavailableError
from domain.entities.task import Completed, Pending, Task, TaskDraft
from domain.repositories.key_value_storage import IKeyValueStorage
from domain.services.id_generator import IIdGenerator, TimestampIdGenerator
from domain.services.task_codec import decode_tasks, encode_tasks

logger = structlog.get_logger()

DEFAULT_STORAGE_KEY = "tasks"

UPDATABLE_FIELDS = frozenset({"description", "priority", "category", "due_date", "state"})


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskStore:
    """Load-full / mutate / save-full store over one key-value slot.

    Every mutation re-reads the whole collection, changes it in memory and
    writes the whole collection back. There is no cross-call atomicity: two
    processes sharing a slot overwrite each other (last writer wins).

    Storage and decoding failures never reach the caller. Loads degrade to an
    empty collection and saves to a no-op, both logged. Lookups by an unknown
    id return None (or False for ``delete``) instead of raising.

    The store does not validate descriptions or due dates; that is up to
    whoever builds the drafts.
    """

    def __init__(
        self,
        storage: IKeyValueStorage,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        id_generator: IIdGenerator | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._storage = storage
        self._key = storage_key
        self._ids = id_generator or TimestampIdGenerator()
        self._clock = clock

    @property
    def storage_key(self) -> str:
        return self._key

    def load_all(self) -> list[Task]:
        """Return the persisted collection in insertion order."""
        try:
            blob = self._storage.get_item(self._key)
        except StorageUnavailableError as e:
            logger.error("task_store_load_failed", key=self._key, error=e.message)
            return []
        if not blob:
            return []
        try:
            return decode_tasks(blob)
        except CorruptTaskDataError as e:
            logger.error("task_store_data_corrupt", key=self._key, error=e.message)
            return []

    def save_all(self, tasks: list[Task]) -> bool:
        """Overwrite the persisted collection; returns False if the write was lost."""
        try:
            blob = encode_tasks(tasks)
            self._storage.set_item(self._key, blob)
        except (StorageUnavailableError, CorruptTaskDataError) as e:
            logger.error(
                "task_store_save_failed", key=self._key, error=e.message, count=len(tasks)
            )
            return False
        return True

    def get(self, task_id: str) -> Task | None:
        for task in self.load_all():
            if task.id == task_id:
                return task
        return None

    def add(self, draft: TaskDraft) -> Task:
        """Create a task from ``draft`` and append it to the collection."""
        tasks = self.load_all()
        task = Task(
            id=self._ids.new_id(),
            description=draft.description,
            priority=draft.priority,
            category=draft.category,
            created_at=self._clock(),
            due_date=draft.due_date,
            state=draft.state,
        )
        tasks.append(task)
        self.save_all(tasks)
        logger.debug("task_added", task_id=task.id, total=len(tasks))
        return task

    def update(self, task_id: str, **changes: Any) -> Task | None:
        """Shallow-merge ``changes`` over the task with ``task_id``.

        Fields not named in ``changes`` keep their value; ``due_date=None``
        clears the due date. Returns None, without writing, when no task has
        that id.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot update task field(s): {', '.join(sorted(unknown))}")

        tasks = self.load_all()
        for index, task in enumerate(tasks):
            if task.id == task_id:
                updated = replace(task, **changes)
                tasks[index] = updated
                self.save_all(tasks)
                logger.debug("task_updated", task_id=task_id, fields=sorted(changes))
                return updated
        logger.info("task_update_missing", task_id=task_id)
        return None

    def delete(self, task_id: str) -> bool:
        tasks = self.load_all()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            return False
        self.save_all(remaining)
        logger.debug("task_deleted", task_id=task_id, total=len(remaining))
        return True

    def complete(self, task_id: str) -> Task | None:
        return self.update(task_id, state=Completed(at=self._clock()))

    def uncomplete(self, task_id: str) -> Task | None:
        return self.update(task_id, state=Pending())

    def toggle(self, task_id: str) -> Task | None:
        """Complete a pending task or reopen a completed one."""
        task = self.get(task_id)
        if task is None:
            return None
        if task.is_completed:
            return self.uncomplete(task_id)
        return self.complete(task_id)

    def clear(self) -> None:
        """Drop the whole collection."""
        try:
            self._storage.remove_item(self._key)
        except StorageUnavailableError as e:
            logger.error("task_store_clear_failed", key=self._key, error=e.message)
