"""Salesperson earnings overview."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.core.exceptions import StorageError
from onboarding.domain.vendor import Vendor, VendorStatus
from onboarding.repositories.earnings import EarningsRepository
from onboarding.repositories.vendor import VendorRepository

logger = logging.getLogger(__name__)


@dataclass
class EarningsSummary:
    total_vendors: int
    pending_count: int
    approved_count: int
    rejected_count: int
    approval_rate: int
    total_earnings: int
    source: str  # "aggregate" | "computed"


def approval_rate(approved: int, total: int) -> int:
    """Percentage of approved vendors, rounded half up; 0 when there are none."""
    if total <= 0:
        return 0
    return math.floor(100 * approved / total + 0.5)


def summarize(vendors: list[Vendor], aggregate: dict[str, Any] | None = None) -> EarningsSummary:
    counts = {status: 0 for status in VendorStatus}
    for vendor in vendors:
        counts[VendorStatus(vendor.status)] += 1

    if aggregate is not None:
        total_earnings = int(aggregate.get("total_earnings") or 0)
        source = "aggregate"
    else:
        total_earnings = sum(
            v.approved_earnings or 0
            for v in vendors
            if v.status == VendorStatus.APPROVED.value
        )
        source = "computed"

    approved = counts[VendorStatus.APPROVED]
    return EarningsSummary(
        total_vendors=len(vendors),
        pending_count=counts[VendorStatus.PENDING],
        approved_count=approved,
        rejected_count=counts[VendorStatus.REJECTED],
        approval_rate=approval_rate(approved, len(vendors)),
        total_earnings=total_earnings,
        source=source,
    )


class EarningsService:
    def __init__(self, session: AsyncSession):
        self._earnings = EarningsRepository(session)
        self._vendors = VendorRepository(session)

    async def _load_aggregate(self, salesperson_id: str) -> dict[str, Any] | None:
        try:
            aggregate = await self._earnings.get_for_salesperson(salesperson_id)
        except StorageError as exc:
            logger.warning(
                "Earnings aggregate unavailable (%s); computing locally: %s",
                exc.kind.value, exc.raw,
            )
            return None
        if aggregate is None:
            logger.info("No earnings aggregate for %s yet; computing locally", salesperson_id)
        return aggregate

    async def overview(self, salesperson_id: str) -> EarningsSummary:
        # The aggregate is read first: a failed read rolls the session back,
        # which must not expire vendors loaded in the same request.
        aggregate = await self._load_aggregate(salesperson_id)
        vendors = await self._vendors.list_by_salesperson(salesperson_id)
        return summarize(vendors, aggregate)
