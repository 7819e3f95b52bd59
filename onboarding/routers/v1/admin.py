"""Administrator endpoints: review queues and the approve / reject actions."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.auth.deps import require_admin
from onboarding.core.response import DataResponse, ListResponse, listed
from onboarding.db.base import get_db
from onboarding.schemas.common import ERROR_RESPONSES
from onboarding.schemas.vendor import (
    ApproveRequest,
    GroupedVendorsOut,
    RejectRequest,
    SalespersonGroupOut,
    VendorOut,
)
from onboarding.services.approval import ApprovalService
from onboarding.services.identity import Principal
from onboarding.services.vendor import VendorService

router = APIRouter(
    prefix="/admin/vendors",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
    responses=ERROR_RESPONSES,
)

_SALESPERSON_QUERY = Query(
    default=None,
    alias="salesperson",
    description="Only vendors submitted by this salesperson email ('all' for everyone)",
)


def _approvals(request: Request, session: AsyncSession) -> ApprovalService:
    return ApprovalService(session, strict=request.app.state.settings.strict_status_transitions)


@router.get("/pending", response_model=ListResponse[VendorOut])
async def list_pending_vendors(
    salesperson: Optional[str] = _SALESPERSON_QUERY,
    session: AsyncSession = Depends(get_db),
):
    vendors = await VendorService(session).list_pending(salesperson)
    return listed([VendorOut.model_validate(v) for v in vendors])


@router.get("", response_model=ListResponse[VendorOut])
async def list_all_vendors(
    salesperson: Optional[str] = _SALESPERSON_QUERY,
    session: AsyncSession = Depends(get_db),
):
    vendors = await VendorService(session).list_all(salesperson)
    return listed([VendorOut.model_validate(v) for v in vendors])


@router.get("/by-salesperson", response_model=DataResponse[GroupedVendorsOut])
async def list_vendors_by_salesperson(
    view: str = Query(default="pending", pattern="^(pending|all)$"),
    salesperson: Optional[str] = _SALESPERSON_QUERY,
    session: AsyncSession = Depends(get_db),
):
    """Vendors grouped by submitting salesperson, with per-status counts per group."""
    groups, emails = await VendorService(session).grouped(view == "pending", salesperson)
    return {
        "data": GroupedVendorsOut(
            groups=[
                SalespersonGroupOut(
                    salesperson_email=g.salesperson_email,
                    pending_count=g.pending_count,
                    approved_count=g.approved_count,
                    rejected_count=g.rejected_count,
                    vendors=[VendorOut.model_validate(v) for v in g.vendors],
                )
                for g in groups
            ],
            salesperson_emails=emails,
        )
    }


@router.post("/{vendor_id}/approve", response_model=DataResponse[VendorOut])
async def approve_vendor(
    vendor_id: str,
    body: ApproveRequest,
    request: Request,
    admin: Principal = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
):
    vendor = await _approvals(request, session).approve(
        vendor_id, admin, body.approved_listing_count, body.admin_notes
    )
    return {"data": VendorOut.model_validate(vendor)}


@router.post("/{vendor_id}/reject", response_model=DataResponse[VendorOut])
async def reject_vendor(
    vendor_id: str,
    body: RejectRequest,
    request: Request,
    admin: Principal = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
):
    vendor = await _approvals(request, session).reject(
        vendor_id, admin, body.rejection_reason, body.admin_notes
    )
    return {"data": VendorOut.model_validate(vendor)}
