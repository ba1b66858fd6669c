"""SQLite database engine and schema via SQLAlchemy Core."""

from storectl.infrastructure.database.engine import create_db_engine, db_path_for, init_database
from storectl.infrastructure.database.schema import (
    admin_log,
    cart_items,
    config,
    customers,
    event_wal,
    hooks,
    metadata,
    product_sale_elements,
    products,
)

__all__ = [
    "admin_log",
    "cart_items",
    "config",
    "create_db_engine",
    "customers",
    "db_path_for",
    "event_wal",
    "hooks",
    "init_database",
    "metadata",
    "product_sale_elements",
    "products",
]
