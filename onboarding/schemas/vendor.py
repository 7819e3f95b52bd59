"""Vendor Pydantic schemas (request DTOs and response models)."""


from datetime import datetime

from pydantic import Field, field_validator

from onboarding.core.exceptions import StorageErrorKind
from onboarding.schemas.common import CamelModel
from onboarding.services.pricing import MAX_LISTING_COUNT

class VendorOut(CamelModel):
    id: str
    name: str
    category_id: str | None = None
    category_name: str | None = None
    phone_number: str
    address: str
    listing_count: int
    total_price: int
    verified_photo_url: str | None = None
    business_photo_url: str | None = None
    salesperson_id: str | None = None
    salesperson_email: str | None = None
    status: str
    approved_listing_count: int | None = None
    approved_earnings: int | None = None
    approved_at: datetime | None = None
    approved_by: str | None = None
    approver_email: str | None = None
    rejection_reason: str | None = None
    admin_notes: str | None = None
    created_at: datetime

class UploadWarningOut(CamelModel):
    field: str
    kind: StorageErrorKind
    message: str

class VendorCreatedOut(CamelModel):
    vendor: VendorOut
    warnings: list[UploadWarningOut] = Field(default_factory=list)

class ApproveRequest(CamelModel):
    approved_listing_count: int = Field(ge=0, le=MAX_LISTING_COUNT, strict=True)
    admin_notes: str | None = None

class RejectRequest(CamelModel):
    rejection_reason: str
    admin_notes: str | None = None

    @field_validator("rejection_reason")
    @classmethod
    def _reason_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Rejection reason is required")
        return value.strip()

class SalespersonGroupOut(CamelModel):
    salesperson_email: str
    pending_count: int
    approved_count: int
    rejected_count: int
    vendors: list[VendorOut]

class GroupedVendorsOut(CamelModel):
    groups: list[SalespersonGroupOut]
    salesperson_emails: list[str]
