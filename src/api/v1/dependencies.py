"""Dependency injection factories for API v1."""

from collections.abc import Callable
from datetime import datetime
from functools import lru_cache

from core.config import settings
from domain.repositories.key_value_storage import IKeyValueStorage
from domain.services.id_generator import build_id_generator
from domain.services.task_store import TaskStore, utc_now
from infrastructure.database.session import session_factory
from infrastructure.database.sqlalchemy_kv_storage import SQLAlchemyKeyValueStorage


@lru_cache
def get_key_value_storage() -> IKeyValueStorage:
    """Get the storage backing the task store."""
    return SQLAlchemyKeyValueStorage(session_factory)


@lru_cache
def get_task_store() -> TaskStore:
    """Get Task store instance."""
    return TaskStore(
        get_key_value_storage(),
        storage_key=settings.storage_key,
        id_generator=build_id_generator(settings.id_strategy),
    )


def get_clock() -> Callable[[], datetime]:
    """Wall clock used for overdue checks and stats."""
    return utc_now
