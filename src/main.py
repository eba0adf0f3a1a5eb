"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import APP_VERSION
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from api.v1.dependencies import get_task_store
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter, rate_limit_exceeded_handler
from domain.services.seed import seed_if_empty
from infrastructure.database.session import engine, init_db

logger = structlog.get_logger()

setup_logging()

API_DESCRIPTION = f"""\
## Personal Task Manager

Keep a single list of tasks, each with a priority, a category and an
optional due date.

### Listing
Filter by status, priority and category, search the description, and get
the results pending-first, by priority, then by due date.

### Statistics
Totals, completed/pending counts, outstanding high-priority and overdue tasks.

### Rate Limits
- GET endpoints: {READ_LIMIT}
- POST/PATCH/DELETE: {WRITE_LIMIT}
"""


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the storage table and seed sample tasks on first start."""
    init_db(engine)
    if settings.seed_sample_tasks:
        seed_if_empty(get_task_store())
    logger.info(
        "application_started",
        environment=settings.app_env,
        storage_key=settings.storage_key,
    )
    yield
    engine.dispose()
    logger.info("application_stopped")


def _add_middleware(app: FastAPI) -> None:
    # Starlette wraps in reverse: the last middleware added sees the request first.
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=API_DESCRIPTION,
        version=APP_VERSION,
        debug=settings.debug,
        openapi_tags=[
            {"name": "health", "description": "Liveness and storage checks"},
            {"name": "tasks", "description": "Create, edit, complete, filter and delete tasks"},
        ],
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    setup_exception_handlers(app)
    _add_middleware(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
        log_config=None,
    )


if __name__ == "__main__":
    run()
