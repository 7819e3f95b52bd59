"""Principal and role schemas."""

from datetime import datetime

from onboarding.domain.user_role import Role
from onboarding.schemas.common import CamelModel

class PrincipalOut(CamelModel):
    id: str
    email: str | None = None
    role: Role

class RoleLookupOut(CamelModel):
    user_id: str
    role: Role
    is_default: bool

class RoleAssign(CamelModel):
    role: Role
    email: str | None = None

class UserRoleOut(CamelModel):
    user_id: str
    role: Role
    email: str | None = None
    created_at: datetime
