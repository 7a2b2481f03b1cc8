"""Initial schema - organizations, users, posts

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# --- Enum types ---
plan_type_enum = sa.Enum("FREE", "PRO", "ENTERPRISE", name="plantype", create_type=True)
role_enum = sa.Enum("OWNER", "ADMIN", "USER", name="role", create_type=True)


def upgrade() -> None:
    plan_type_enum.create(op.get_bind(), checkfirst=True)
    role_enum.create(op.get_bind(), checkfirst=True)

    # 1. organizations
    op.create_table(
        "organizations",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("plan", plan_type_enum, server_default="FREE", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    # Storage-level guard for the check-then-create slug race
    op.create_index("ix_organizations_slug", "organizations", ["slug"], unique=True)

    # 2. users
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", role_enum, server_default="USER", nullable=False),
        sa.Column(
            "organization_id",
            sa.Uuid(),
            sa.ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    # Emails are unique across all tenants
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("idx_users_organization_id", "users", ["organization_id"])

    # At most one OWNER per organization
    op.execute(
        "CREATE UNIQUE INDEX uq_users_one_owner_per_org ON users (organization_id) WHERE role = 'OWNER';"
    )

    # 3. posts
    op.create_table(
        "posts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text, nullable=True),
        sa.Column(
            "organization_id",
            sa.Uuid(),
            sa.ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("author_id", sa.Uuid(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("idx_posts_organization_id", "posts", ["organization_id"])


def downgrade() -> None:
    op.drop_index("idx_posts_organization_id", table_name="posts")
    op.drop_table("posts")

    op.execute("DROP INDEX IF EXISTS uq_users_one_owner_per_org;")
    op.drop_index("idx_users_organization_id", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    op.drop_index("ix_organizations_slug", table_name="organizations")
    op.drop_table("organizations")

    role_enum.drop(op.get_bind(), checkfirst=True)
    plan_type_enum.drop(op.get_bind(), checkfirst=True)
