"""Database engine and session management."""

from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import settings
from infrastructure.database.models import Base


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for ``database_url``.

    SQLite connections are shared with whichever thread serves the request,
    and an in-memory database keeps a single connection so every session
    sees the same data.
    """
    kwargs: dict[str, Any] = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(database_url, **kwargs)


def build_session_factory(bind: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=bind,
        class_=Session,
        expire_on_commit=False,
        autoflush=False,
    )


def init_db(bind: Engine) -> None:
    """Create missing tables. Existing tables are left as they are."""
    Base.metadata.create_all(bind)


engine = build_engine(settings.database_url, echo=settings.debug)

session_factory = build_session_factory(engine)
