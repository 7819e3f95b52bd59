"""Pytest configuration and fixtures for the onboarding API tests.

Each test gets its own SQLite database and storage root under tmp_path, a
FastAPI app built from explicit settings, and helpers for signing bearer
tokens the way the identity provider would.
"""

import time
import uuid
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession

import onboarding.domain  # noqa: F401  (registers every model on Base.metadata)
from onboarding.core.config import Settings
from onboarding.db.base import Base
from onboarding.domain.category import Category
from onboarding.domain.user_role import Role, UserRole
from onboarding.main import create_app
from onboarding.services.identity import Principal
from onboarding.services.storage import BUSINESS_PHOTOS_BUCKET, VERIFIED_PHOTOS_BUCKET

TEST_SECRET = "test-secret"
FRONTEND_URL = "http://frontend.test"

SALESPERSON_ID = "11111111-1111-1111-1111-111111111111"
SALESPERSON_EMAIL = "sales@example.com"
OTHER_SALESPERSON_ID = "22222222-2222-2222-2222-222222222222"
OTHER_SALESPERSON_EMAIL = "other.sales@example.com"
ADMIN_ID = "99999999-9999-9999-9999-999999999999"
ADMIN_EMAIL = "admin@example.com"


def make_token(
    user_id: str,
    email: str | None = None,
    *,
    secret: str = TEST_SECRET,
    audience: str = "authenticated",
    expires_in: int = 3600,
) -> str:
    payload = {
        "sub": user_id,
        "aud": audience,
        "exp": int(time.time()) + expires_in,
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(user_id: str, email: str | None = None) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


# ── App / database ───────────────────────────────────────────────

@pytest.fixture
def settings(tmp_path) -> Settings:
    storage_root = tmp_path / "storage"
    (storage_root / VERIFIED_PHOTOS_BUCKET).mkdir(parents=True)
    (storage_root / BUSINESS_PHOTOS_BUCKET).mkdir(parents=True)
    return Settings(
        app_env="test",
        frontend_url=FRONTEND_URL,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_SECRET,
        storage_root=str(storage_root),
    )


@pytest_asyncio.fixture
async def app(settings: Settings):
    application = create_app(settings)
    async with application.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield application
    await application.state.engine.dispose()


@pytest_asyncio.fixture
async def db_session(app) -> AsyncGenerator[AsyncSession, None]:
    async with app.state.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


# ── Test data ────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def category(db_session: AsyncSession) -> Category:
    cat = Category(id=str(uuid.uuid4()), name="Caterers", description="Food and drinks")
    db_session.add(cat)
    await db_session.commit()
    return cat


@pytest_asyncio.fixture
async def admin_role(db_session: AsyncSession) -> UserRole:
    row = UserRole(user_id=ADMIN_ID, role=Role.ADMIN.value, email=ADMIN_EMAIL)
    db_session.add(row)
    await db_session.commit()
    return row


@pytest.fixture
def salesperson() -> Principal:
    return Principal(id=SALESPERSON_ID, email=SALESPERSON_EMAIL, role=Role.SALESPERSON)


@pytest.fixture
def admin() -> Principal:
    return Principal(id=ADMIN_ID, email=ADMIN_EMAIL, role=Role.ADMIN)


@pytest.fixture
def sales_headers() -> dict:
    return bearer(SALESPERSON_ID, SALESPERSON_EMAIL)


@pytest.fixture
def other_sales_headers() -> dict:
    return bearer(OTHER_SALESPERSON_ID, OTHER_SALESPERSON_EMAIL)


@pytest.fixture
def admin_headers(admin_role) -> dict:
    return bearer(ADMIN_ID, ADMIN_EMAIL)


def vendor_form(category_id: str, **overrides) -> dict:
    form = {
        "name": "Sharma Decor",
        "categoryId": category_id,
        "phoneNumber": "9876543210",
        "address": "12 MG Road, Bengaluru",
        "listingCount": "5",
    }
    form.update(overrides)
    return form
