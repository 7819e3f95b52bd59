"""Identity resolution: who is calling, and in which role.

Role policy: a principal without a ``user_roles`` row is treated as
``DEFAULT_ROLE`` (overridable per deployment). A missing row is expected for
new users; a missing ``user_roles`` table is not, and surfaces as a
``StorageError`` of kind ``NOT_CONFIGURED``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.core.exceptions import StorageError, StorageErrorKind
from onboarding.domain.user_role import Role, UserRole
from onboarding.repositories.token import RevokedTokenRepository
from onboarding.repositories.user_role import UserRoleRepository

logger = logging.getLogger(__name__)

DEFAULT_ROLE = Role.SALESPERSON


@dataclass(frozen=True)
class Principal:
    id: str
    email: str | None
    role: Role
    token_digest: str | None = None
    expires_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class RoleLookup:
    user_id: str
    role: Role
    is_default: bool


class IdentityService:
    def __init__(self, session: AsyncSession, default_role: Role = DEFAULT_ROLE):
        self._roles = UserRoleRepository(session)
        self._tokens = RevokedTokenRepository(session)
        self._default_role = default_role

    async def get_user_role(self, user_id: str) -> RoleLookup:
        try:
            row = await self._roles.get(user_id)
        except StorageError as exc:
            if exc.kind is StorageErrorKind.NOT_CONFIGURED:
                logger.error("user_roles table is missing; run the database migrations (%s)", exc.raw)
                raise StorageError(
                    StorageErrorKind.NOT_CONFIGURED,
                    "Role storage is not configured. Run the database migrations.",
                    raw=exc.raw,
                ) from exc
            raise

        if row is None:
            logger.info("No role row for user %s; using default role %s", user_id, self._default_role.value)
            return RoleLookup(user_id=user_id, role=self._default_role, is_default=True)
        return RoleLookup(user_id=user_id, role=Role(row.role), is_default=False)

    async def set_user_role(self, user_id: str, role: Role, email: str | None = None) -> UserRole:
        row = await self._roles.upsert(user_id, role, email)
        logger.info("Set role %s for user %s", role.value, user_id)
        return row

    async def list_user_roles(self) -> list[UserRole]:
        return await self._roles.list_newest_first()

    async def is_revoked(self, token_digest: str) -> bool:
        return await self._tokens.is_revoked(token_digest)

    async def sign_out(self, principal: Principal) -> None:
        if principal.token_digest is None:
            return
        await self._tokens.revoke(principal.token_digest, principal.id, principal.expires_at)
        logger.info("User %s signed out", principal.id)
