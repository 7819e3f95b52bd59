"""FastAPI dependencies for authentication and authorization.

Dependencies:
  get_optional_principal → Principal or None (root redirector)
  get_current_principal  → Principal, 401 when missing / invalid / revoked
  require_admin          → Principal with the admin role, 403 otherwise
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.auth.jwt import decode_token, token_digest, token_expiry
from onboarding.core.config import Settings
from onboarding.core.exceptions import ForbiddenError, UnauthorizedError
from onboarding.db.base import get_db
from onboarding.domain.user_role import Role
from onboarding.services.identity import IdentityService, Principal

bearer_scheme = HTTPBearer(auto_error=False)


def identity_service(request: Request, session: AsyncSession) -> IdentityService:
    settings: Settings = request.app.state.settings
    return IdentityService(session, default_role=Role(settings.default_role))


async def _resolve(request: Request, token: str, session: AsyncSession) -> Principal | None:
    payload = decode_token(token, request.app.state.settings)
    user_id: str | None = payload.get("sub")
    if not user_id:
        return None

    identity = identity_service(request, session)
    digest = token_digest(token)
    if await identity.is_revoked(digest):
        return None

    lookup = await identity.get_user_role(user_id)
    return Principal(
        id=user_id,
        email=payload.get("email"),
        role=lookup.role,
        token_digest=digest,
        expires_at=token_expiry(payload),
    )


# ── Core principal dependencies ─────────────────────────────

async def get_optional_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_db),
) -> Principal | None:
    if credentials is None:
        return None
    return await _resolve(request, credentials.credentials, session)


async def get_current_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_db),
) -> Principal:
    if credentials is None:
        raise UnauthorizedError()
    principal = await _resolve(request, credentials.credentials, session)
    if principal is None:
        raise UnauthorizedError("Invalid or expired token")
    return principal


# ── Role guard ──────────────────────────────────────────────

async def require_admin(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    if not principal.is_admin:
        raise ForbiddenError("Administrator access required")
    return principal
