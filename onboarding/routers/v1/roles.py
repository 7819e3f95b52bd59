"""Role endpoints.

Assigning a role only requires an authenticated caller; who may assign
roles to whom is left to the store's own access policies.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.auth.deps import get_current_principal, identity_service
from onboarding.core.response import DataResponse, ListResponse, listed
from onboarding.db.base import get_db
from onboarding.schemas.common import ERROR_RESPONSES
from onboarding.schemas.identity import RoleAssign, RoleLookupOut, UserRoleOut
from onboarding.services.identity import Principal

router = APIRouter(prefix="/roles", tags=["Roles"], responses=ERROR_RESPONSES)


@router.get("/me", response_model=DataResponse[RoleLookupOut])
async def my_role(
    request: Request,
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_db),
):
    lookup = await identity_service(request, session).get_user_role(principal.id)
    return {"data": RoleLookupOut.model_validate(lookup)}


@router.get("", response_model=ListResponse[UserRoleOut])
async def list_roles(
    request: Request,
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_db),
):
    rows = await identity_service(request, session).list_user_roles()
    return listed([UserRoleOut.model_validate(r) for r in rows])


@router.put("/{user_id}", response_model=DataResponse[UserRoleOut])
async def assign_role(
    user_id: str,
    body: RoleAssign,
    request: Request,
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_db),
):
    email = body.email or (principal.email if user_id == principal.id else None)
    row = await identity_service(request, session).set_user_role(user_id, body.role, email)
    return {"data": UserRoleOut.model_validate(row)}
