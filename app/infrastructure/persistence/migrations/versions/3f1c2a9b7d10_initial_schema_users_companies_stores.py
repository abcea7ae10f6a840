"""initial_schema_users_companies_stores

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-01-12 10:04:31.518204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9b7d10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "company",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=120), nullable=False),
        sa.Column("logo", sa.Text(), nullable=True),
        sa.Column("plan", sa.String(), nullable=False, server_default="FREE"),
        sa.Column(
            "grandfathered", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        *_timestamps(),
        sa.CheckConstraint(
            "plan IN ('FREE', 'PRO', 'ENTERPRISE')", name="company_plan_check"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_company_slug"), "company", ["slug"], unique=True)

    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("current_company_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["current_company_id"], ["company.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_app_user_email"), "app_user", ["email"], unique=True)

    op.create_table(
        "company_member",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("company_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("invite_status", sa.String(), nullable=False),
        sa.Column("invite_token", sa.String(length=64), nullable=True),
        sa.Column("invited_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('OWNER', 'ADMIN', 'MEMBER', 'STOCKIST')",
            name="company_member_role_check",
        ),
        sa.CheckConstraint(
            "invite_status IN ('PENDING', 'ACCEPTED')",
            name="company_member_invite_status_check",
        ),
        sa.ForeignKeyConstraint(["company_id"], ["company.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("company_id", "email", name="uq_company_member_email"),
        sa.UniqueConstraint("invite_token"),
    )
    op.create_index(
        op.f("ix_company_member_company_id"), "company_member", ["company_id"]
    )
    op.create_index(op.f("ix_company_member_user_id"), "company_member", ["user_id"])

    op.create_table(
        "store",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("company_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("url", sa.String(length=500), nullable=False),
        sa.Column("consumer_key", sa.Text(), nullable=False),
        sa.Column("consumer_secret", sa.Text(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("commission_rate", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("shipping_cost", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("currency", sa.String(length=8), nullable=True),
        sa.Column("last_sync_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('ACTIVE', 'INACTIVE', 'ERROR')", name="store_status_check"
        ),
        sa.ForeignKeyConstraint(["company_id"], ["company.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("company_id", "url", name="uq_store_company_url"),
    )
    op.create_index(op.f("ix_store_company_id"), "store", ["company_id"])
    op.create_index(op.f("ix_store_status"), "store", ["status"])

    op.create_table(
        "password_reset_token",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_password_reset_token_token_hash"),
        "password_reset_token",
        ["token_hash"],
        unique=True,
    )
    op.create_index(
        op.f("ix_password_reset_token_user_id"), "password_reset_token", ["user_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("password_reset_token")
    op.drop_table("store")
    op.drop_table("company_member")
    op.drop_table("app_user")
    op.drop_index(op.f("ix_company_slug"), table_name="company")
    op.drop_table("company")
