"""Database configuration and session helpers."""

from __future__ import annotations

from typing import Any, Dict, Iterator

from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from .config import DATABASE_URL, PGSSLMODE


def build_engine(url: str = DATABASE_URL) -> Engine:
    """Create the process-wide engine (and its connection pool) for ``url``."""

    connect_args: Dict[str, Any] = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    elif PGSSLMODE:
        connect_args["sslmode"] = PGSSLMODE
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine()


def get_session() -> Iterator[Session]:
    """FastAPI dependency that yields a database session."""

    with Session(engine) as session:
        yield session


__all__ = ["build_engine", "engine", "get_session"]
