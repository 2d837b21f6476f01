"""Database session configuration."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from typing import Any, TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from setlist_board.core.settings import settings
from setlist_board.services.ranking import register_sqlite_functions

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import setlist_board.models  # noqa: E402,F401


def configure_engine(engine: Engine) -> Engine:
    """Install per-connection hooks the feed queries rely on."""
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", register_sqlite_functions)
    return engine


def build_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine for ``url`` with the board's connection hooks."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return configure_engine(create_engine(url, **kwargs))


engine = build_engine(
    settings.database_url,
    pool_pre_ping=True,
    echo=settings.sql_debug,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_atomic(db: Session, fn: Callable[[], T]) -> T:
    """Run ``fn`` as one atomic unit of work.

    Everything ``fn`` writes through ``db`` is committed together. Any
    exception rolls the whole unit back and propagates to the caller.
    """
    try:
        result = fn()
        db.commit()
    except Exception:
        logger.warning("Atomic unit rolled back", exc_info=True)
        db.rollback()
        raise
    return result
