"""Vendor form validation."""

import pytest

from onboarding.core.exceptions import FormValidationError
from onboarding.services.pricing import MAX_LISTING_COUNT
from onboarding.services.validation import (
    PhotoUpload,
    is_valid_phone,
    parse_listing_count,
    validate_vendor_form,
)

MB = 1024 * 1024


def _validate(photos=None, **overrides):
    fields = {
        "name": "Sharma Decor",
        "category_id": "cat-1",
        "phone_number": "9876543210",
        "address": "12 MG Road",
        "listing_count": "3",
    }
    fields.update(overrides)
    return validate_vendor_form(photos=photos or [], max_photo_bytes=5 * MB, **fields)


@pytest.mark.parametrize("phone", ["9876543210", "0000000000"])
def test_phone_accepts_exactly_ten_digits(phone):
    assert is_valid_phone(phone)


@pytest.mark.parametrize(
    "phone",
    ["12345", "98765-43210", "98765432101", "987654321a", " 9876543210", "", "٩٨٧٦٥٤٣٢١٠"],
)
def test_phone_rejects_everything_else(phone):
    assert not is_valid_phone(phone)


def test_listing_count_parsing():
    assert parse_listing_count("7") == 7
    assert parse_listing_count(" 12 ") == 12
    assert parse_listing_count("") == 0
    assert parse_listing_count(None) == 0
    assert parse_listing_count("-2") == -2
    assert parse_listing_count("2.5") is None
    assert parse_listing_count("abc") is None
    assert parse_listing_count(True) is None


def test_valid_form_yields_draft_with_total_price():
    draft = _validate(name="  Sharma Decor ", address=" 12 MG Road ")
    assert draft.name == "Sharma Decor"
    assert draft.address == "12 MG Road"
    assert draft.listing_count == 3
    assert draft.total_price == 260


def test_all_field_errors_are_reported_together():
    with pytest.raises(FormValidationError) as exc_info:
        _validate(name=" ", category_id="", phone_number="12345", address="", listing_count="-1")

    fields = exc_info.value.fields
    assert fields == {
        "name": "Vendor name is required",
        "categoryId": "Vendor category is required",
        "phoneNumber": "Phone number must be 10 digits",
        "address": "Address is required",
        "listingCount": "Listing count cannot be negative",
    }
    assert exc_info.value.status_code == 422


def test_listing_count_has_an_upper_bound():
    assert _validate(listing_count=str(MAX_LISTING_COUNT)).total_price == 200 + 20 * MAX_LISTING_COUNT

    with pytest.raises(FormValidationError) as exc_info:
        _validate(listing_count="99999999999999999999")
    assert exc_info.value.fields == {"listingCount": f"Listing count cannot exceed {MAX_LISTING_COUNT}"}


def test_non_numeric_listing_count_is_rejected():
    with pytest.raises(FormValidationError) as exc_info:
        _validate(listing_count="lots")
    assert exc_info.value.fields == {"listingCount": "Listing count must be a whole number"}


def test_photo_size_limit_is_inclusive():
    at_limit = PhotoUpload("verifiedPhoto", "a.jpg", "image/jpeg", b"x" * (5 * MB))
    draft = _validate(photos=[at_limit])
    assert draft.total_price == 260

    too_big = PhotoUpload("businessPhoto", "b.png", "image/png", b"x" * (5 * MB + 1))
    with pytest.raises(FormValidationError) as exc_info:
        _validate(photos=[at_limit, too_big])
    assert exc_info.value.fields == {"businessPhoto": "Business photo must be less than 5MB"}
