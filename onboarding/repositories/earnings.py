"""Reader for the salesperson_earnings view."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from onboarding.domain.earnings import salesperson_earnings
from onboarding.repositories.base import BaseRepository


class EarningsRepository(BaseRepository):
    """Not bound to an ORM model: the view is read through a plain table() construct."""

    async def get_for_salesperson(self, salesperson_id: str) -> dict[str, Any] | None:
        q = select(salesperson_earnings).where(
            salesperson_earnings.c.salesperson_id == salesperson_id
        )
        result = await self._execute(q)
        row = result.mappings().first()
        return dict(row) if row is not None else None
