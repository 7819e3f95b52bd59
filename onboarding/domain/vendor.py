"""SQLAlchemy ORM model for vendor applications.

A vendor row is created once by a salesperson (always ``pending``) and then
only touched by the approve / reject transitions. Fields of the two terminal
states are mutually exclusive:

  approved  -> approved_listing_count, approved_earnings, approved_at
  rejected  -> rejection_reason

approved_by / approver_email record whoever performed the last transition.
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from onboarding.db.base import Base
from onboarding.domain.category import Category
from onboarding.domain.mixins import TimestampMixin


class VendorStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Vendor(Base, TimestampMixin):
    __tablename__ = "vendors"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("categories.id"), nullable=True, index=True
    )
    phone_number: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    listing_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)

    # Object-store paths; both optional
    verified_photo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    business_photo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Submitting salesperson
    salesperson_id: Mapped[Optional[str]] = mapped_column(String(36), index=True, nullable=True)
    salesperson_email: Mapped[Optional[str]] = mapped_column(String(255), index=True, nullable=True)

    # "pending" | "approved" | "rejected"
    status: Mapped[str] = mapped_column(
        String(20), default=VendorStatus.PENDING.value, nullable=False, index=True
    )
    approved_listing_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    approved_earnings: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_by: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    approver_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    admin_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    category: Mapped[Optional[Category]] = relationship(lazy="raise")

    @property
    def category_name(self) -> str | None:
        return self.category.name if self.category is not None else None
