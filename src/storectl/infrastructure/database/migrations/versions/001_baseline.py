"""Baseline schema — catalog, config, hooks, customers, cart, events.

Revision ID: 001_baseline
Revises: None
Create Date: 2026-09-14

Existing databases get stamped at this revision without running it;
fresh databases created after this migration was added get it applied
during ``storectl upgrade``.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001_baseline"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("ref", sa.Text, nullable=False, unique=True),
        sa.Column("title", sa.Text, nullable=False, server_default=""),
        sa.Column("visible", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created", sa.Text, nullable=False),
        sa.Column("modified", sa.Text, nullable=False),
    )

    op.create_table(
        "product_sale_elements",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "product_id",
            sa.Integer,
            sa.ForeignKey("products.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("ref", sa.Text, nullable=False, server_default=""),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created", sa.Text, nullable=False),
        sa.Column("modified", sa.Text, nullable=False),
    )
    op.create_index("ix_pse_product", "product_sale_elements", ["product_id"])

    op.create_table(
        "config",
        sa.Column("name", sa.Text, primary_key=True),
        sa.Column("value", sa.Text, nullable=False, server_default=""),
        sa.Column("secured", sa.Integer, nullable=False, server_default="1"),
        sa.Column("hidden", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created", sa.Text, nullable=False),
        sa.Column("modified", sa.Text, nullable=False),
    )

    op.create_table(
        "hooks",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("code", sa.Text, nullable=False),
        sa.Column("type", sa.Integer, nullable=False),
        sa.Column("native", sa.Integer, nullable=False, server_default="0"),
        sa.Column("active", sa.Integer, nullable=False, server_default="1"),
        sa.Column("block", sa.Integer, nullable=False, server_default="0"),
        sa.Column("by_module", sa.Integer, nullable=False, server_default="0"),
        sa.Column("locale", sa.Text, nullable=False, server_default="en_US"),
        sa.Column("title", sa.Text, nullable=False, server_default=""),
        sa.Column("chapo", sa.Text, nullable=False, server_default=""),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("created", sa.Text, nullable=False),
        sa.Column("modified", sa.Text, nullable=False),
        sa.UniqueConstraint("code", "type", name="uq_hooks_code_type"),
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.Text, nullable=False, unique=True),
        sa.Column("firstname", sa.Text, nullable=False, server_default=""),
        sa.Column("lastname", sa.Text, nullable=False, server_default=""),
        sa.Column("remember_me_token", sa.Text),
        sa.Column("remember_me_serial", sa.Text),
        sa.Column("created", sa.Text, nullable=False),
    )
    op.create_index("ix_customers_remember", "customers", ["remember_me_serial"])

    op.create_table(
        "cart_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("cart_token", sa.Text, nullable=False),
        sa.Column("product_id", sa.Integer, sa.ForeignKey("products.id"), nullable=False),
        sa.Column(
            "product_sale_elements_id",
            sa.Integer,
            sa.ForeignKey("product_sale_elements.id"),
        ),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("created", sa.Text, nullable=False),
        sa.Column("modified", sa.Text, nullable=False),
    )
    op.create_index("ix_cart_items_token", "cart_items", ["cart_token"])

    op.create_table(
        "event_wal",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("hook_name", sa.Text, nullable=False),
        sa.Column("payload", sa.Text, nullable=False),
        sa.Column("status", sa.Text, nullable=False),
        sa.Column("error", sa.Text),
        sa.Column("retries", sa.Integer, server_default="0"),
        sa.Column("created", sa.Text, nullable=False),
        sa.Column("completed", sa.Text),
    )
    op.create_index("ix_event_wal_status", "event_wal", ["status"])


def downgrade() -> None:
    op.drop_table("event_wal")
    op.drop_table("cart_items")
    op.drop_table("customers")
    op.drop_table("hooks")
    op.drop_table("config")
    op.drop_table("product_sale_elements")
    op.drop_table("products")
