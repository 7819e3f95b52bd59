"""Async SQLAlchemy engine and session factory builders, declarative Base, and FastAPI dependency.

The engine is built once per process by ``create_app`` and kept on
``app.state``; nothing here holds a module-level connection.
"""


from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from onboarding.core.config import Settings

# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def build_engine(settings: Settings) -> AsyncEngine:
    engine_kwargs: dict = {
        "pool_pre_ping": True,
        "echo": False,
    }

    is_sqlite = settings.database_url.startswith("sqlite")
    # SQLite (local dev) doesn't support connection pooling parameters
    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}

    engine = create_async_engine(settings.database_url, **engine_kwargs)

    if is_sqlite:
        # SQLite ignores foreign keys unless asked per connection
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine

# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )

# ---------------------------------------------------------------------------
# Declarative Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """All ORM models inherit from this base."""

# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session; roll back on error."""
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
