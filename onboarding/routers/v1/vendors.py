"""Salesperson vendor endpoints: list own vendors, submit a new vendor.

Pattern:
  1. Declare a router with prefix and tags
  2. Inject DB session + current principal via Depends
  3. Instantiate the service with (session, object storage)
  4. Call service methods and wrap result in response envelope
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from onboarding.auth.deps import get_current_principal
from onboarding.core.response import DataResponse, ListResponse, listed
from onboarding.db.base import get_db
from onboarding.domain.vendor import VendorStatus
from onboarding.schemas.common import ERROR_RESPONSES
from onboarding.schemas.vendor import UploadWarningOut, VendorCreatedOut, VendorOut
from onboarding.services.identity import Principal
from onboarding.services.validation import PhotoUpload, validate_vendor_form
from onboarding.services.vendor import VendorService

router = APIRouter(prefix="/vendors", tags=["Vendors"], responses=ERROR_RESPONSES)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _svc(request: Request, session: AsyncSession) -> VendorService:
    return VendorService(session, request.app.state.storage)


async def _read_photo(field: str, upload: UploadFile | None) -> PhotoUpload | None:
    """An empty file input arrives as a nameless or zero-byte part; treat it as absent."""
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    if not data:
        return None
    return PhotoUpload(field=field, filename=upload.filename, content_type=upload.content_type, data=data)


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("/mine", response_model=ListResponse[VendorOut])
async def list_my_vendors(
    request: Request,
    filter_status: str = Query(
        default="all",
        alias="status",
        pattern="^(all|pending|approved|rejected)$",
        description="Filter by status",
    ),
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_db),
):
    """Vendors submitted by the caller, newest first. Filter by ?status=pending|approved|rejected."""
    wanted = None if filter_status == "all" else VendorStatus(filter_status)
    vendors = await _svc(request, session).list_for_salesperson(principal.id, wanted)
    return listed([VendorOut.model_validate(v) for v in vendors])


@router.post("", response_model=DataResponse[VendorCreatedOut], status_code=status.HTTP_201_CREATED)
async def create_vendor(
    request: Request,
    name: str = Form(default=""),
    category_id: str = Form(default="", alias="categoryId"),
    phone_number: str = Form(default="", alias="phoneNumber"),
    address: str = Form(default=""),
    listing_count: str = Form(default="0", alias="listingCount"),
    verified_photo: UploadFile | None = File(default=None, alias="verifiedPhoto"),
    business_photo: UploadFile | None = File(default=None, alias="businessPhoto"),
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_db),
):
    """Submit a vendor for review. Photos are optional; upload problems come back as warnings."""
    photos = [
        photo
        for photo in (
            await _read_photo("verifiedPhoto", verified_photo),
            await _read_photo("businessPhoto", business_photo),
        )
        if photo is not None
    ]
    draft = validate_vendor_form(
        name=name,
        category_id=category_id,
        phone_number=phone_number,
        address=address,
        listing_count=listing_count,
        photos=photos,
        max_photo_bytes=request.app.state.settings.max_photo_size_bytes,
    )

    result = await _svc(request, session).create_vendor(principal, draft, photos)
    return {
        "data": VendorCreatedOut(
            vendor=VendorOut.model_validate(result.vendor),
            warnings=[UploadWarningOut.model_validate(w) for w in result.warnings],
        )
    }
