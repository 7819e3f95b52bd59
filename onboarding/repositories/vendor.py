"""Vendor repository: persistence only, no business validation.

Every read eager-loads the category so ``Vendor.category_name`` is safe to
access outside the session. The relationship is ``lazy="raise"``, so a query
that skips ``_base_query`` fails loudly instead of reporting no category.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from onboarding.domain.vendor import Vendor, VendorStatus
from onboarding.repositories.base import BaseRepository


class VendorRepository(BaseRepository[Vendor]):
    model = Vendor

    def _base_query(self):
        return select(Vendor).options(selectinload(Vendor.category))

    def _newest_first(self, q):
        return q.order_by(Vendor.created_at.desc())

    async def _all(self, q) -> list[Vendor]:
        result = await self._execute(q)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, vendor_id: str) -> Vendor | None:
        q = (
            self._base_query()
            .where(Vendor.id == vendor_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(q)
        return result.scalars().first()

    async def list_by_salesperson(self, salesperson_id: str) -> list[Vendor]:
        return await self._all(
            self._newest_first(self._base_query().where(Vendor.salesperson_id == salesperson_id))
        )

    async def list_by_salesperson_and_status(
        self, salesperson_id: str, status: VendorStatus
    ) -> list[Vendor]:
        q = self._base_query().where(
            Vendor.salesperson_id == salesperson_id,
            Vendor.status == status.value,
        )
        return await self._all(self._newest_first(q))

    async def list_pending(self) -> list[Vendor]:
        q = self._base_query().where(Vendor.status == VendorStatus.PENDING.value)
        return await self._all(self._newest_first(q))

    async def list_all(self) -> list[Vendor]:
        return await self._all(self._newest_first(self._base_query()))

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> Vendor:
        kwargs["status"] = VendorStatus.PENDING.value
        vendor = await super().create(**kwargs)
        return await self.get_by_id(vendor.id)  # type: ignore[return-value]

    async def update_for_approval(
        self,
        vendor_id: str,
        *,
        approved_listing_count: int,
        approved_earnings: int,
        approved_at: datetime,
        approver_id: str,
        approver_email: str | None,
        admin_notes: str | None,
    ) -> Vendor | None:
        await self.update(
            vendor_id,
            status=VendorStatus.APPROVED.value,
            approved_listing_count=approved_listing_count,
            approved_earnings=approved_earnings,
            approved_at=approved_at,
            approved_by=approver_id,
            approver_email=approver_email,
            admin_notes=admin_notes,
            rejection_reason=None,
        )
        return await self.get_by_id(vendor_id)

    async def update_for_rejection(
        self,
        vendor_id: str,
        *,
        rejection_reason: str,
        approver_id: str,
        approver_email: str | None,
        admin_notes: str | None,
    ) -> Vendor | None:
        await self.update(
            vendor_id,
            status=VendorStatus.REJECTED.value,
            approved_listing_count=None,
            approved_earnings=None,
            approved_at=None,
            approved_by=approver_id,
            approver_email=approver_email,
            rejection_reason=rejection_reason,
            admin_notes=admin_notes,
        )
        return await self.get_by_id(vendor_id)
