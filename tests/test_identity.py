"""Role resolution and storage error classification."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError

from onboarding.core.exceptions import StorageError, StorageErrorKind
from onboarding.domain.user_role import Role
from onboarding.repositories.base import classify_db_error
from onboarding.services.identity import DEFAULT_ROLE, IdentityService

from tests.conftest import ADMIN_ID, SALESPERSON_EMAIL, SALESPERSON_ID


class _PgError(Exception):
    def __init__(self, message: str, sqlstate: str):
        super().__init__(message)
        self.sqlstate = sqlstate


@pytest.mark.parametrize(
    "exc,expected",
    [
        (IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: vendors.phone_number")),
         StorageErrorKind.CONFLICT),
        (IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed")),
         StorageErrorKind.INVALID_REFERENCE),
        (OperationalError("SELECT", {}, Exception("no such table: user_roles")),
         StorageErrorKind.NOT_CONFIGURED),
        (ProgrammingError("SELECT", {}, _PgError("relation missing", "42P01")),
         StorageErrorKind.NOT_CONFIGURED),
        (ProgrammingError("INSERT", {}, _PgError("new row violates row-level security policy", "42501")),
         StorageErrorKind.POLICY_DENIED),
        (OperationalError("SELECT", {}, Exception("disk I/O error")),
         StorageErrorKind.UNKNOWN),
    ],
)
def test_database_errors_are_classified_once(exc, expected):
    assert classify_db_error(exc) is expected


@pytest.mark.asyncio
async def test_missing_role_row_falls_back_to_salesperson(db_session):
    lookup = await IdentityService(db_session).get_user_role(SALESPERSON_ID)
    assert lookup.role is Role.SALESPERSON
    assert lookup.role is DEFAULT_ROLE
    assert lookup.is_default is True


@pytest.mark.asyncio
async def test_default_role_policy_is_configurable(db_session):
    lookup = await IdentityService(db_session, default_role=Role.USER).get_user_role(SALESPERSON_ID)
    assert lookup.role is Role.USER
    assert lookup.is_default is True


@pytest.mark.asyncio
async def test_existing_row_wins(db_session, admin_role):
    lookup = await IdentityService(db_session).get_user_role(ADMIN_ID)
    assert lookup.role is Role.ADMIN
    assert lookup.is_default is False


@pytest.mark.asyncio
async def test_set_role_is_an_upsert(db_session):
    identity = IdentityService(db_session)
    await identity.set_user_role(SALESPERSON_ID, Role.USER, SALESPERSON_EMAIL)
    await identity.set_user_role(SALESPERSON_ID, Role.ADMIN)
    await db_session.commit()

    rows = await identity.list_user_roles()
    assert len(rows) == 1
    assert rows[0].role == Role.ADMIN.value
    assert rows[0].email == SALESPERSON_EMAIL
    assert (await identity.get_user_role(SALESPERSON_ID)).role is Role.ADMIN


@pytest.mark.asyncio
async def test_missing_roles_table_is_a_configuration_error(app, db_session):
    async with app.state.engine.begin() as conn:
        await conn.execute(text("DROP TABLE user_roles"))

    with pytest.raises(StorageError) as exc_info:
        await IdentityService(db_session).get_user_role(SALESPERSON_ID)
    assert exc_info.value.kind is StorageErrorKind.NOT_CONFIGURED
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_concurrent_first_assignment_is_last_write_wins(app):
    async with app.state.session_factory() as first, app.state.session_factory() as second:
        second_identity = IdentityService(second)
        assert (await second_identity.get_user_role(SALESPERSON_ID)).is_default

        await IdentityService(first).set_user_role(SALESPERSON_ID, Role.ADMIN, SALESPERSON_EMAIL)
        await first.commit()

        row = await second_identity.set_user_role(SALESPERSON_ID, Role.USER)
        await second.commit()
        assert row.role == Role.USER.value
        assert row.email == SALESPERSON_EMAIL

    async with app.state.session_factory() as session:
        lookup = await IdentityService(session).get_user_role(SALESPERSON_ID)
        assert lookup.role is Role.USER
