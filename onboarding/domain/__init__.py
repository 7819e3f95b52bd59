"""Domain package: all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  vendor.py     - vendor applications and their approval state
  category.py   - vendor categories (read-only in this service)
  user_role.py  - identity -> role mapping
  token.py      - bearer tokens revoked by sign-out
  earnings.py   - salesperson_earnings view (not part of Base.metadata)
  mixins.py     - shared TimestampMixin
"""

from onboarding.domain.category import Category
from onboarding.domain.token import RevokedToken
from onboarding.domain.user_role import Role, UserRole
from onboarding.domain.vendor import Vendor, VendorStatus

__all__ = [
    "Category",
    "RevokedToken",
    "Role",
    "UserRole",
    "Vendor",
    "VendorStatus",
]
