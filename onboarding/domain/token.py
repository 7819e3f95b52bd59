"""SQLAlchemy ORM model for bearer tokens revoked by sign-out."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from onboarding.db.base import Base
from onboarding.domain.mixins import TimestampMixin


class RevokedToken(Base, TimestampMixin):
    __tablename__ = "revoked_tokens"

    # SHA-256 hex digest of the raw token; the token itself is never stored
    token_digest: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
