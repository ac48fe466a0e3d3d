"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from functools import lru_cache, wraps
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from revcart.core.config import get_settings

Base = declarative_base()

_current_session: ContextVar[Optional[Session]] = ContextVar("revcart_current_session", default=None)


@lru_cache
def get_engine():
    settings = get_settings()
    url = (settings.database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


@lru_cache
def _get_sessionmaker():
    # entities are returned to callers after the session closes
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, expire_on_commit=False, future=True)


@contextmanager
def get_session() -> Iterator[Session]:
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def unit_of_work() -> Iterator[Session]:
    """
    One transaction for everything executed inside the block.

    Nested calls join the outermost unit of work, which commits once when it
    exits cleanly and rolls back every write if an exception escapes.
    """
    active = _current_session.get()
    if active is not None:
        yield active
        return
    with get_session() as session:
        marker = _current_session.set(session)
        try:
            yield session
            session.commit()
        except BaseException:
            session.rollback()
            raise
        finally:
            _current_session.reset(marker)


def current_session() -> Optional[Session]:
    return _current_session.get()


def transactional(func):
    """Run ``func`` inside a single ``unit_of_work()``."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        with unit_of_work():
            return func(*args, **kwargs)

    return wrapper
