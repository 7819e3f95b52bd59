"""Approval workflow for vendor applications.

    pending --approve--> approved
    pending --reject---> rejected

By default the workflow is permissive: an approved vendor may be rejected
later (and vice versa), each call overwriting the other state's fields.
With ``strict=True`` only pending vendors can be transitioned.
"""

from __future__ import annotations

import enum
import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from onboarding.domain.vendor import Vendor, VendorStatus
from onboarding.repositories.vendor import VendorRepository
from onboarding.services.identity import Principal
from onboarding.services.pricing import MAX_LISTING_COUNT, approved_earnings

logger = logging.getLogger(__name__)


class ApprovalAction(str, enum.Enum):
    APPROVE = "approve"
    REJECT = "reject"


_TARGETS = {
    ApprovalAction.APPROVE: VendorStatus.APPROVED,
    ApprovalAction.REJECT: VendorStatus.REJECTED,
}


def transition(current: VendorStatus, action: ApprovalAction, *, strict: bool = False) -> VendorStatus:
    if strict and current is not VendorStatus.PENDING:
        raise InvalidTransitionError(current.value, action.value)
    return _TARGETS[action]


def _clean_notes(notes: str | None) -> str | None:
    if notes is None:
        return None
    return notes.strip() or None


class ApprovalService:
    def __init__(self, session: AsyncSession, strict: bool = False):
        self._repo = VendorRepository(session)
        self._strict = strict

    async def _load(self, vendor_id: str, action: ApprovalAction) -> Vendor:
        vendor = await self._repo.get_by_id(vendor_id)
        if vendor is None:
            raise NotFoundError("Vendor", vendor_id)
        transition(VendorStatus(vendor.status), action, strict=self._strict)
        return vendor

    async def approve(
        self,
        vendor_id: str,
        approver: Principal,
        approved_listing_count: int,
        notes: str | None = None,
    ) -> Vendor:
        if isinstance(approved_listing_count, bool) or not isinstance(approved_listing_count, int):
            raise ValidationError("Approved listing count must be a whole number")
        if approved_listing_count < 0:
            raise ValidationError("Approved listing count cannot be negative")
        if approved_listing_count > MAX_LISTING_COUNT:
            raise ValidationError(f"Approved listing count cannot exceed {MAX_LISTING_COUNT}")

        await self._load(vendor_id, ApprovalAction.APPROVE)
        vendor = await self._repo.update_for_approval(
            vendor_id,
            approved_listing_count=approved_listing_count,
            approved_earnings=approved_earnings(approved_listing_count),
            approved_at=datetime.now(timezone.utc),
            approver_id=approver.id,
            approver_email=approver.email,
            admin_notes=_clean_notes(notes),
        )
        if vendor is None:
            raise NotFoundError("Vendor", vendor_id)
        logger.info(
            "Vendor %s approved by %s with %d listing(s)",
            vendor_id, approver.id, approved_listing_count,
        )
        return vendor

    async def reject(
        self,
        vendor_id: str,
        approver: Principal,
        rejection_reason: str,
        notes: str | None = None,
    ) -> Vendor:
        reason = (rejection_reason or "").strip()
        if not reason:
            raise ValidationError("Rejection reason is required")

        await self._load(vendor_id, ApprovalAction.REJECT)
        vendor = await self._repo.update_for_rejection(
            vendor_id,
            rejection_reason=reason,
            approver_id=approver.id,
            approver_email=approver.email,
            admin_notes=_clean_notes(notes),
        )
        if vendor is None:
            raise NotFoundError("Vendor", vendor_id)
        logger.info("Vendor %s rejected by %s", vendor_id, approver.id)
        return vendor
