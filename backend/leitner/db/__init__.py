"""Database package."""

from leitner.db.base import Base, async_session_maker, build_engine, engine, init_db

__all__ = ["engine", "async_session_maker", "Base", "build_engine", "init_db"]
