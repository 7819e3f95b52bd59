from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.auth.deps import get_current_principal, identity_service
from onboarding.core.response import DataResponse
from onboarding.db.base import get_db
from onboarding.schemas.common import ERROR_RESPONSES
from onboarding.schemas.identity import PrincipalOut
from onboarding.services.identity import Principal

router = APIRouter(prefix="/auth", tags=["Auth"], responses=ERROR_RESPONSES)


@router.get("/me", response_model=DataResponse[PrincipalOut])
async def current_principal(principal: Principal = Depends(get_current_principal)):
    return {"data": PrincipalOut.model_validate(principal)}


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    request: Request,
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_db),
):
    """Revoke the bearer token used for this request."""
    await identity_service(request, session).sign_out(principal)
