"""Administrator review endpoints."""

import pytest
from httpx import AsyncClient

from onboarding.services.pricing import MAX_LISTING_COUNT
from tests.conftest import (
    ADMIN_EMAIL,
    ADMIN_ID,
    OTHER_SALESPERSON_EMAIL,
    SALESPERSON_EMAIL,
    vendor_form,
)


async def _submit(client: AsyncClient, headers: dict, category_id: str, phone: str, listing_count: str = "5") -> str:
    resp = await client.post(
        "/api/v1/vendors",
        data=vendor_form(category_id, phoneNumber=phone, listingCount=listing_count),
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["vendor"]["id"]


@pytest.mark.api
@pytest.mark.asyncio
class TestAdminAccess:
    async def test_salesperson_is_forbidden(self, client: AsyncClient, sales_headers):
        resp = await client.get("/api/v1/admin/vendors/pending", headers=sales_headers)
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "FORBIDDEN"

    async def test_anonymous_is_unauthorized(self, client: AsyncClient):
        resp = await client.get("/api/v1/admin/vendors")
        assert resp.status_code == 401


@pytest.mark.api
@pytest.mark.asyncio
class TestReviewQueues:
    async def test_pending_and_all_are_newest_first(
        self, client: AsyncClient, sales_headers, other_sales_headers, admin_headers, category
    ):
        first = await _submit(client, sales_headers, category.id, "9000000001")
        second = await _submit(client, other_sales_headers, category.id, "9000000002")
        third = await _submit(client, sales_headers, category.id, "9000000003")
        await client.post(
            f"/api/v1/admin/vendors/{second}/reject",
            json={"rejectionReason": "duplicate listing"},
            headers=admin_headers,
        )

        pending = await client.get("/api/v1/admin/vendors/pending", headers=admin_headers)
        assert [v["id"] for v in pending.json()["data"]] == [third, first]

        everything = await client.get("/api/v1/admin/vendors", headers=admin_headers)
        assert [v["id"] for v in everything.json()["data"]] == [third, second, first]

        filtered = await client.get(
            "/api/v1/admin/vendors", params={"salesperson": OTHER_SALESPERSON_EMAIL}, headers=admin_headers
        )
        assert [v["id"] for v in filtered.json()["data"]] == [second]

    async def test_grouped_by_salesperson(
        self, client: AsyncClient, sales_headers, other_sales_headers, admin_headers, category
    ):
        a = await _submit(client, sales_headers, category.id, "9000000001")
        await _submit(client, sales_headers, category.id, "9000000002")
        await _submit(client, other_sales_headers, category.id, "9000000003")
        await client.post(
            f"/api/v1/admin/vendors/{a}/approve", json={"approvedListingCount": 1}, headers=admin_headers
        )

        resp = await client.get("/api/v1/admin/vendors/by-salesperson?view=all", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert sorted(data["salespersonEmails"]) == sorted([SALESPERSON_EMAIL, OTHER_SALESPERSON_EMAIL])

        groups = {g["salespersonEmail"]: g for g in data["groups"]}
        mine = groups[SALESPERSON_EMAIL]
        assert (mine["pendingCount"], mine["approvedCount"], mine["rejectedCount"]) == (1, 1, 0)
        assert len(mine["vendors"]) == 2
        assert groups[OTHER_SALESPERSON_EMAIL]["pendingCount"] == 1

        pending_only = await client.get(
            "/api/v1/admin/vendors/by-salesperson",
            params={"view": "pending", "salesperson": SALESPERSON_EMAIL},
            headers=admin_headers,
        )
        groups = pending_only.json()["data"]["groups"]
        assert len(groups) == 1
        assert groups[0]["salespersonEmail"] == SALESPERSON_EMAIL
        assert [v["status"] for v in groups[0]["vendors"]] == ["pending"]


@pytest.mark.api
@pytest.mark.asyncio
class TestDecisions:
    async def test_end_to_end_create_approve_reject(
        self, client: AsyncClient, sales_headers, admin_headers, category
    ):
        vendor_id = await _submit(client, sales_headers, category.id, "9876543210", listing_count="5")

        approved = await client.post(
            f"/api/v1/admin/vendors/{vendor_id}/approve",
            json={"approvedListingCount": 5, "adminNotes": "verified on call"},
            headers=admin_headers,
        )
        assert approved.status_code == 200, approved.text
        vendor = approved.json()["data"]
        assert vendor["status"] == "approved"
        assert vendor["approvedEarnings"] == 100
        assert vendor["approvedListingCount"] == 5
        assert vendor["approvedBy"] == ADMIN_ID
        assert vendor["approverEmail"] == ADMIN_EMAIL
        assert vendor["adminNotes"] == "verified on call"
        assert vendor["approvedAt"] is not None
        assert vendor["totalPrice"] == 300

        rejected = await client.post(
            f"/api/v1/admin/vendors/{vendor_id}/reject",
            json={"rejectionReason": "bad address"},
            headers=admin_headers,
        )
        assert rejected.status_code == 200, rejected.text
        vendor = rejected.json()["data"]
        assert vendor["status"] == "rejected"
        assert vendor["rejectionReason"] == "bad address"
        assert vendor["approvedEarnings"] is None
        assert vendor["approvedListingCount"] is None
        assert vendor["approvedAt"] is None
        assert vendor["adminNotes"] is None

    async def test_non_numeric_count_is_rejected(self, client: AsyncClient, sales_headers, admin_headers, category):
        vendor_id = await _submit(client, sales_headers, category.id, "9876543210")

        for bad in ("five", -1, 2.5, None):
            resp = await client.post(
                f"/api/v1/admin/vendors/{vendor_id}/approve",
                json={"approvedListingCount": bad},
                headers=admin_headers,
            )
            assert resp.status_code == 422, bad

    async def test_approved_count_above_limit_is_rejected(
        self, client: AsyncClient, sales_headers, admin_headers, category
    ):
        vendor_id = await _submit(client, sales_headers, category.id, "9876543210")

        for count in (MAX_LISTING_COUNT + 1, 10**20):
            resp = await client.post(
                f"/api/v1/admin/vendors/{vendor_id}/approve",
                json={"approvedListingCount": count},
                headers=admin_headers,
            )
            assert resp.status_code == 422, count
            assert list(resp.json()["error"]["fields"]) == ["approvedListingCount"]

        pending = await client.get("/api/v1/admin/vendors/pending", headers=admin_headers)
        assert [v["id"] for v in pending.json()["data"]] == [vendor_id]

    async def test_rejection_reason_is_required(self, client: AsyncClient, sales_headers, admin_headers, category):
        vendor_id = await _submit(client, sales_headers, category.id, "9876543210")

        resp = await client.post(
            f"/api/v1/admin/vendors/{vendor_id}/reject",
            json={"rejectionReason": "   "},
            headers=admin_headers,
        )
        assert resp.status_code == 422
        assert resp.json() == {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request",
                "fields": {"rejectionReason": "Rejection reason is required"},
            }
        }

        pending = await client.get("/api/v1/admin/vendors/pending", headers=admin_headers)
        assert [v["id"] for v in pending.json()["data"]] == [vendor_id]

    async def test_unknown_vendor(self, client: AsyncClient, admin_headers):
        resp = await client.post(
            "/api/v1/admin/vendors/missing/approve",
            json={"approvedListingCount": 1},
            headers=admin_headers,
        )
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "NOT_FOUND"
