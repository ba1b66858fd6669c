"""SQLAlchemy Core table definitions for the storectl database."""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("ref", Text, nullable=False, unique=True),
    Column("title", Text, nullable=False, default="", server_default=""),
    Column("visible", Integer, nullable=False, default=1, server_default="1"),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

product_sale_elements = Table(
    "product_sale_elements",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
    Column("ref", Text, nullable=False, default="", server_default=""),
    Column("quantity", Integer, nullable=False, default=0, server_default="0"),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

# Key/value store configuration (``verifyStock``, ``store_name``, ...).
config = Table(
    "config",
    metadata,
    Column("name", Text, primary_key=True),
    Column("value", Text, nullable=False, default="", server_default=""),
    Column("secured", Integer, nullable=False, default=1, server_default="1"),
    Column("hidden", Integer, nullable=False, default=1, server_default="1"),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

hooks = Table(
    "hooks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("code", Text, nullable=False),
    Column("type", Integer, nullable=False),
    Column("native", Integer, nullable=False, default=0, server_default="0"),
    Column("active", Integer, nullable=False, default=1, server_default="1"),
    Column("block", Integer, nullable=False, default=0, server_default="0"),
    Column("by_module", Integer, nullable=False, default=0, server_default="0"),
    Column("locale", Text, nullable=False, default="en_US", server_default="en_US"),
    Column("title", Text, nullable=False, default="", server_default=""),
    Column("chapo", Text, nullable=False, default="", server_default=""),
    Column("description", Text, nullable=False, default="", server_default=""),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
    UniqueConstraint("code", "type", name="uq_hooks_code_type"),
)

customers = Table(
    "customers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", Text, nullable=False, unique=True),
    Column("firstname", Text, nullable=False, default="", server_default=""),
    Column("lastname", Text, nullable=False, default="", server_default=""),
    Column("remember_me_token", Text),
    Column("remember_me_serial", Text),
    Column("created", Text, nullable=False),
)

cart_items = Table(
    "cart_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("cart_token", Text, nullable=False),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False),
    Column("product_sale_elements_id", Integer, ForeignKey("product_sale_elements.id")),
    Column("quantity", Integer, nullable=False),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

admin_log = Table(
    "admin_log",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("resource", Text, nullable=False),
    Column("action", Text, nullable=False),
    Column("message", Text, nullable=False),
    Column("created", Text, nullable=False),
)

event_wal = Table(
    "event_wal",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("hook_name", Text, nullable=False),
    Column("payload", Text, nullable=False),  # JSON
    Column("status", Text, nullable=False),
    Column("error", Text),
    Column("retries", Integer, default=0, server_default="0"),
    Column("created", Text, nullable=False),
    Column("completed", Text),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_pse_product", product_sale_elements.c.product_id)
Index("ix_cart_items_token", cart_items.c.cart_token)
Index("ix_customers_remember", customers.c.remember_me_serial)
Index("ix_event_wal_status", event_wal.c.status)
