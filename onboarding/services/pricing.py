"""Vendor pricing and salesperson earnings arithmetic."""

BASE_FEE = 200
PER_LISTING_FEE = 20

# Upper bound for listing counts; keeps prices well inside a 32-bit INTEGER column
MAX_LISTING_COUNT = 100_000


def total_price(listing_count: int) -> int:
    """Price quoted to a vendor at creation: base fee plus a fee per listing."""
    if listing_count < 0:
        raise ValueError("listing_count must be >= 0")
    return BASE_FEE + PER_LISTING_FEE * listing_count


def approved_earnings(approved_listing_count: int) -> int:
    """Salesperson earnings credited for an approved vendor."""
    if approved_listing_count < 0:
        raise ValueError("approved_listing_count must be >= 0")
    return PER_LISTING_FEE * approved_listing_count
