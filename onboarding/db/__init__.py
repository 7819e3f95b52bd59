"""Database package: async SQLAlchemy engine/session builders, Base."""
from onboarding.db.base import Base, build_engine, build_session_factory, get_db

__all__ = ["Base", "build_engine", "build_session_factory", "get_db"]
