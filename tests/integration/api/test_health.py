"""Tests for health check endpoints."""

import threading

import pytest
from httpx import ASGITransport, AsyncClient

from api.v1.dependencies import get_key_value_storage
from main import create_app
from tests.fakes import BrokenStorage, ThreadRecordingStorage


class TestHealthEndpoint:
    """Tests for the liveness endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_200(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_health_returns_correct_structure(self, client: AsyncClient) -> None:
        data = (await client.get("/health")).json()

        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["environment"] == "development"
        assert "timestamp" in data
        assert data["storage"] is None

    @pytest.mark.asyncio
    async def test_health_carries_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert "x-request-id" in response.headers


class TestDetailedHealthEndpoint:
    """Tests for the storage-probing health endpoint."""

    @pytest.mark.asyncio
    async def test_healthy_storage(self, api_client: AsyncClient) -> None:
        data = (await api_client.get("/health/detailed")).json()

        assert data["status"] == "healthy"
        assert data["storage"] == "healthy"

    @pytest.mark.asyncio
    async def test_unavailable_storage_is_degraded(self) -> None:
        app = create_app()
        app.dependency_overrides[get_key_value_storage] = BrokenStorage

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["storage"].startswith("unhealthy")

    @pytest.mark.asyncio
    async def test_storage_read_runs_off_the_event_loop_thread(self) -> None:
        storage = ThreadRecordingStorage()
        app = create_app()
        app.dependency_overrides[get_key_value_storage] = lambda: storage

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/health/detailed")

        assert response.status_code == 200
        assert storage.threads
        assert threading.current_thread() not in storage.threads
