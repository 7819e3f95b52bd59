"""Vendor form validation: runs before anything is sent to the store.

Error keys match the form field names the client submits, so they can be
shown next to the offending input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from onboarding.core.exceptions import FormValidationError
from onboarding.services.pricing import MAX_LISTING_COUNT, total_price

# ASCII digits only; \d would also accept other Unicode digits
PHONE_PATTERN = re.compile(r"[0-9]{10}")

PHOTO_LABELS: dict[str, str] = {
    "verifiedPhoto": "Verified photo",
    "businessPhoto": "Business photo",
}


@dataclass
class PhotoUpload:
    field: str
    filename: str
    content_type: str | None
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def label(self) -> str:
        return PHOTO_LABELS.get(self.field, "Photo")


@dataclass
class VendorDraft:
    name: str
    category_id: str
    phone_number: str
    address: str
    listing_count: int
    total_price: int


def is_valid_phone(value: str) -> bool:
    return PHONE_PATTERN.fullmatch(value) is not None


def parse_listing_count(raw: str | int | None) -> int | None:
    """Return the listing count as an int, or None when it is not a whole number."""
    if raw is None:
        return 0
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = raw.strip()
    if not text:
        return 0
    if not re.fullmatch(r"-?[0-9]+", text):
        return None
    return int(text)


def validate_vendor_form(
    *,
    name: str,
    category_id: str,
    phone_number: str,
    address: str,
    listing_count: str | int | None,
    photos: list[PhotoUpload],
    max_photo_bytes: int,
) -> VendorDraft:
    errors: dict[str, str] = {}

    if not name.strip():
        errors["name"] = "Vendor name is required"
    if not category_id.strip():
        errors["categoryId"] = "Vendor category is required"
    if not is_valid_phone(phone_number):
        errors["phoneNumber"] = "Phone number must be 10 digits"
    if not address.strip():
        errors["address"] = "Address is required"

    count = parse_listing_count(listing_count)
    if count is None:
        errors["listingCount"] = "Listing count must be a whole number"
    elif count < 0:
        errors["listingCount"] = "Listing count cannot be negative"
    elif count > MAX_LISTING_COUNT:
        errors["listingCount"] = f"Listing count cannot exceed {MAX_LISTING_COUNT}"

    max_mb = max_photo_bytes // (1024 * 1024)
    for photo in photos:
        if photo.size > max_photo_bytes:
            errors[photo.field] = f"{photo.label} must be less than {max_mb}MB"

    if errors:
        raise FormValidationError(errors)

    return VendorDraft(
        name=name.strip(),
        category_id=category_id.strip(),
        phone_number=phone_number,
        address=address.strip(),
        listing_count=count,  # type: ignore[arg-type]
        total_price=total_price(count),  # type: ignore[arg-type]
    )
