from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.auth.deps import get_current_principal
from onboarding.core.response import DataResponse
from onboarding.db.base import get_db
from onboarding.schemas.common import ERROR_RESPONSES
from onboarding.schemas.earnings import EarningsSummaryOut
from onboarding.services.earnings import EarningsService
from onboarding.services.identity import Principal

router = APIRouter(prefix="/earnings", tags=["Earnings"], responses=ERROR_RESPONSES)


@router.get("/me", response_model=DataResponse[EarningsSummaryOut])
async def my_earnings(
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_db),
):
    """Earnings overview for the calling salesperson."""
    summary = await EarningsService(session).overview(principal.id)
    return {"data": EarningsSummaryOut.model_validate(summary)}
