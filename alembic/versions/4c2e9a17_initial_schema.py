"""Initial schema

Revision ID: 4c2e9a17
Revises: -
Create Date: 2026-10-18

Creates the realm, client, role and federated role mapping tables.
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "4c2e9a17"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # ── realms ────────────────────────────────────────────────────────────
    op.create_table(
        "realms",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    # ── clients ───────────────────────────────────────────────────────────
    op.create_table(
        "clients",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "realm_id",
            sa.String(36),
            sa.ForeignKey("realms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("client_id", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("realm_id", "client_id", name="uq_clients_realm_client"),
    )

    # ── roles ─────────────────────────────────────────────────────────────
    op.create_table(
        "roles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "realm_id",
            sa.String(36),
            sa.ForeignKey("realms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("container_id", sa.String(36), nullable=False),
        sa.Column("client_role", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("container_id", "name", name="uq_roles_container_name"),
    )
    op.create_index("ix_roles_realm_id", "roles", ["realm_id"])

    # ── federated_role_mappings ───────────────────────────────────────────
    op.create_table(
        "federated_role_mappings",
        sa.Column(
            "realm_id",
            sa.String(36),
            sa.ForeignKey("realms.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column(
            "role_id",
            sa.String(36),
            sa.ForeignKey("roles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "ix_federated_role_mappings_user",
        "federated_role_mappings",
        ["realm_id", "user_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_federated_role_mappings_user", table_name="federated_role_mappings")
    op.drop_table("federated_role_mappings")
    op.drop_index("ix_roles_realm_id", table_name="roles")
    op.drop_table("roles")
    op.drop_table("clients")
    op.drop_table("realms")
