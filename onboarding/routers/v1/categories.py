from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.auth.deps import get_current_principal
from onboarding.core.response import ListResponse, listed
from onboarding.db.base import get_db
from onboarding.repositories.category import CategoryRepository
from onboarding.schemas.category import CategoryOut
from onboarding.schemas.common import ERROR_RESPONSES

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
    dependencies=[Depends(get_current_principal)],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=ListResponse[CategoryOut])
async def list_categories(session: AsyncSession = Depends(get_db)):
    """Categories a vendor can be filed under, ordered by name."""
    categories = await CategoryRepository(session).list_by_name()
    return listed([CategoryOut.model_validate(c) for c in categories])
