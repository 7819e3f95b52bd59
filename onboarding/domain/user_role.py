"""SQLAlchemy ORM model mapping an external identity to an application role."""

from __future__ import annotations

import enum
from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from onboarding.db.base import Base
from onboarding.domain.mixins import TimestampMixin


class Role(str, enum.Enum):
    SALESPERSON = "salesperson"
    ADMIN = "admin"
    USER = "user"


class UserRole(Base, TimestampMixin):
    __tablename__ = "user_roles"

    # Identity provider subject; one row per user, upserted on assignment
    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=Role.SALESPERSON.value)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
