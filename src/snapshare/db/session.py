"""Engine and session factory for the relational post store."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from snapshare.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Register every mapped class on Base.metadata.
import snapshare.models  # noqa: E402,F401


def _engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.sql_debug}
    if url.startswith("sqlite"):
        # Request threads and the startup sync share connections.
        options["connect_args"] = {"check_same_thread": False}
    return options


engine = create_engine(settings.sqlalchemy_url, **_engine_options(settings.sqlalchemy_url))

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request; closed when the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
