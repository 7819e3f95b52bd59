"""initial schema: categories, vendors, user_roles, revoked_tokens, salesperson_earnings view

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

from onboarding.domain.earnings import (
    CREATE_SALESPERSON_EARNINGS_VIEW,
    DROP_SALESPERSON_EARNINGS_VIEW,
)

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_categories_created_at", "categories", ["created_at"])

    op.create_table(
        "vendors",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("category_id", sa.String(36), sa.ForeignKey("categories.id"), nullable=True),
        sa.Column("phone_number", sa.String(10), nullable=False, unique=True),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("listing_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_price", sa.Integer(), nullable=False),
        sa.Column("verified_photo_url", sa.String(500), nullable=True),
        sa.Column("business_photo_url", sa.String(500), nullable=True),
        sa.Column("salesperson_id", sa.String(36), nullable=True),
        sa.Column("salesperson_email", sa.String(255), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("approved_listing_count", sa.Integer(), nullable=True),
        sa.Column("approved_earnings", sa.Integer(), nullable=True),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("approved_by", sa.String(36), nullable=True),
        sa.Column("approver_email", sa.String(255), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_vendors_name", "vendors", ["name"])
    op.create_index("ix_vendors_category_id", "vendors", ["category_id"])
    op.create_index("ix_vendors_salesperson_id", "vendors", ["salesperson_id"])
    op.create_index("ix_vendors_salesperson_email", "vendors", ["salesperson_email"])
    op.create_index("ix_vendors_status", "vendors", ["status"])
    op.create_index("ix_vendors_created_at", "vendors", ["created_at"])

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="salesperson"),
        sa.Column("email", sa.String(255), nullable=True),
        _created_at(),
    )
    op.create_index("ix_user_roles_email", "user_roles", ["email"])
    op.create_index("ix_user_roles_created_at", "user_roles", ["created_at"])

    op.create_table(
        "revoked_tokens",
        sa.Column("token_digest", sa.String(64), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )
    op.create_index("ix_revoked_tokens_user_id", "revoked_tokens", ["user_id"])
    op.create_index("ix_revoked_tokens_created_at", "revoked_tokens", ["created_at"])

    op.execute(CREATE_SALESPERSON_EARNINGS_VIEW)


def downgrade() -> None:
    op.execute(DROP_SALESPERSON_EARNINGS_VIEW)
    op.drop_table("revoked_tokens")
    op.drop_table("user_roles")
    op.drop_table("vendors")
    op.drop_table("categories")
