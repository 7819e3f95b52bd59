from sqlalchemy import select

from onboarding.domain.category import Category
from onboarding.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    model = Category

    async def list_by_name(self) -> list[Category]:
        result = await self._execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())
