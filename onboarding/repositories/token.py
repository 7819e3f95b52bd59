from __future__ import annotations

from datetime import datetime

from sqlalchemy import select

from onboarding.domain.token import RevokedToken
from onboarding.repositories.base import BaseRepository


class RevokedTokenRepository(BaseRepository[RevokedToken]):
    model = RevokedToken

    async def is_revoked(self, token_digest: str) -> bool:
        result = await self._execute(
            select(RevokedToken.token_digest).where(RevokedToken.token_digest == token_digest)
        )
        return result.first() is not None

    async def revoke(self, token_digest: str, user_id: str, expires_at: datetime | None) -> None:
        if await self.is_revoked(token_digest):
            return
        await self.create(token_digest=token_digest, user_id=user_id, expires_at=expires_at)
