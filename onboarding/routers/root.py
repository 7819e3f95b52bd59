"""Root redirector: sends a visitor to the screen matching their role."""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from onboarding.auth.deps import get_optional_principal
from onboarding.core.config import Settings
from onboarding.services.identity import Principal

router = APIRouter(tags=["Root"])


def landing_path(principal: Principal | None, settings: Settings) -> str:
    if principal is None:
        return settings.login_path
    if principal.is_admin:
        return settings.admin_path
    return settings.dashboard_path


@router.get("/", response_class=RedirectResponse, include_in_schema=False)
async def root(
    request: Request,
    principal: Optional[Principal] = Depends(get_optional_principal),
):
    settings: Settings = request.app.state.settings
    return RedirectResponse(
        url=f"{settings.frontend_url.rstrip('/')}{landing_path(principal, settings)}",
        status_code=307,
    )
