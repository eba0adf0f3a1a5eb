"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

# Settings are read once at import time: no rate limiting, an in-memory
# database, and no sample data unless a test asks for it.
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_SAMPLE_TASKS"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.services.id_generator import TimestampIdGenerator
from domain.services.task_store import TaskStore
from infrastructure.storage.memory import InMemoryKeyValueStorage
from tests.fakes import FIXED_NOW, FakeClock


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    """Fresh in-memory key-value slots."""
    return InMemoryKeyValueStorage()


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting at FIXED_NOW, one second further on every read."""
    return FakeClock(FIXED_NOW)


@pytest.fixture
def store(storage: InMemoryKeyValueStorage, clock: FakeClock) -> TaskStore:
    """Task store over in-memory storage with a deterministic clock."""
    return TaskStore(storage, storage_key="tasks", id_generator=TimestampIdGenerator(), clock=clock)


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against the real app (no overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    storage: InMemoryKeyValueStorage,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client whose task store lives in memory.

    This client:
    - Overrides the storage dependency with the test's in-memory storage
    - Overrides the task store to use that storage (real wall clock)
    """
    from api.v1.dependencies import get_key_value_storage, get_task_store
    from main import create_app

    app = create_app()
    test_store = TaskStore(storage, storage_key="tasks")

    app.dependency_overrides[get_key_value_storage] = lambda: storage
    app.dependency_overrides[get_task_store] = lambda: test_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
