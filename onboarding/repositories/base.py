"""Generic async repository plus the single place where database errors are classified."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import update
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.core.exceptions import StorageError, StorageErrorKind
from onboarding.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)

# SQLSTATE codes (PostgreSQL drivers expose them on the DBAPI exception)
_SQLSTATE_KINDS: dict[str, StorageErrorKind] = {
    "23505": StorageErrorKind.CONFLICT,
    "23503": StorageErrorKind.INVALID_REFERENCE,
    "42501": StorageErrorKind.POLICY_DENIED,
    "42P01": StorageErrorKind.NOT_CONFIGURED,
}

# Message fragments, checked in order, for drivers without SQLSTATE (SQLite)
_MESSAGE_KINDS: list[tuple[str, StorageErrorKind]] = [
    ("unique constraint", StorageErrorKind.CONFLICT),
    ("duplicate key", StorageErrorKind.CONFLICT),
    ("foreign key", StorageErrorKind.INVALID_REFERENCE),
    ("row-level security", StorageErrorKind.POLICY_DENIED),
    ("permission denied", StorageErrorKind.POLICY_DENIED),
    ("no such table", StorageErrorKind.NOT_CONFIGURED),
    ("does not exist", StorageErrorKind.NOT_CONFIGURED),
]


def classify_db_error(exc: DBAPIError) -> StorageErrorKind:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in _SQLSTATE_KINDS:
        return _SQLSTATE_KINDS[sqlstate]

    message = str(orig if orig is not None else exc).lower()
    for fragment, kind in _MESSAGE_KINDS:
        if fragment in message:
            return kind
    return StorageErrorKind.UNKNOWN


def to_storage_error(exc: DBAPIError) -> StorageError:
    raw = str(exc.orig if exc.orig is not None else exc)
    return StorageError(classify_db_error(exc), raw, raw=raw)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository.

    Every statement runs inside :meth:`_guard`, so callers only ever see
    :class:`StorageError` with a structured kind, never a driver exception.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _guard(self) -> AsyncIterator[None]:
        try:
            yield
        except DBAPIError as exc:
            # A failed statement poisons the transaction; reset before reporting
            await self._session.rollback()
            raise to_storage_error(exc) from exc

    async def _execute(self, statement):
        async with self._guard():
            return await self._session.execute(statement)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        async with self._guard():
            self._session.add(instance)
            await self._session.flush()  # populate id / surface constraint errors
        return instance

    async def update(self, entity_id: str, **kwargs: Any) -> int:
        """Apply column values to one row by id. Returns the affected row count."""
        kwargs.pop("id", None)
        pk = self.model.__mapper__.primary_key[0]
        result = await self._execute(
            update(self.model).where(pk == entity_id).values(**kwargs)
        )
        async with self._guard():
            await self._session.flush()
        return result.rowcount
