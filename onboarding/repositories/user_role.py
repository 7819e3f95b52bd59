"""User role repository: one row per identity, written as an upsert."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite

from onboarding.domain.user_role import Role, UserRole
from onboarding.repositories.base import BaseRepository

# Dialects with INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class UserRoleRepository(BaseRepository[UserRole]):
    model = UserRole

    async def get(self, user_id: str) -> UserRole | None:
        result = await self._execute(select(UserRole).where(UserRole.user_id == user_id))
        return result.scalars().first()

    async def upsert(self, user_id: str, role: Role, email: str | None = None) -> UserRole:
        """Insert or overwrite the role in one statement; the last writer wins.

        An omitted email keeps the one already stored.
        """
        insert = _UPSERT_INSERTS.get(self._session.get_bind().dialect.name)
        if insert is None:
            return await self._read_then_write(user_id, role, email)

        stmt = insert(UserRole).values(user_id=user_id, role=role.value, email=email)
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id"],
            set_={
                "role": stmt.excluded.role,
                "email": func.coalesce(stmt.excluded.email, UserRole.__table__.c.email),
            },
        )
        await self._execute(stmt)

        result = await self._execute(
            select(UserRole)
            .where(UserRole.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().one()

    async def _read_then_write(self, user_id: str, role: Role, email: str | None) -> UserRole:
        existing = await self.get(user_id)
        if existing is None:
            return await self.create(user_id=user_id, role=role.value, email=email)

        existing.role = role.value
        if email:
            existing.email = email
        async with self._guard():
            await self._session.flush()
        return existing

    async def list_newest_first(self) -> list[UserRole]:
        result = await self._execute(select(UserRole).order_by(UserRole.created_at.desc()))
        return list(result.scalars().all())
