"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.v1.dependencies import get_key_value_storage
from core.config import settings
from core.exceptions import StorageUnavailableError
from domain.repositories.key_value_storage import IKeyValueStorage

APP_VERSION = "1.0.0"

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    storage: str | None = None


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic liveness check.

    Returns service status without touching storage.
    """
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
def detailed_health_check(
    storage: IKeyValueStorage = Depends(get_key_value_storage),
) -> HealthResponse:
    """
    Health check including a read of the task slot.

    A failing read reports ``degraded`` instead of an error status, matching
    how the task store itself degrades.
    """
    try:
        storage.get_item(settings.storage_key)
        storage_status = "healthy"
    except StorageUnavailableError as e:
        storage_status = f"unhealthy: {e.message}"

    overall_status = "healthy" if storage_status == "healthy" else "degraded"

    return HealthResponse(
        status=overall_status,
        version=APP_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
        storage=storage_status,
    )
