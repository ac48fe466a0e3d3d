"""Database helpers (engine/session export)."""

from .session import Base, current_session, get_engine, get_session, transactional, unit_of_work

__all__ = ["Base", "current_session", "get_engine", "get_session", "transactional", "unit_of_work"]
