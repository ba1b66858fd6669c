"""Read-oriented repository for products and their sale elements."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.engine import Engine

from storectl.domain.catalog import Product, StockVariant
from storectl.infrastructure.database.schema import product_sale_elements, products


class CatalogRepository:
    """Encapsulates SQL for catalog lookups.

    Satisfies :class:`storectl.domain.cart.CatalogLookup`, so it can be
    handed straight to a :class:`CartLineValidator`.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def find_product(self, product_id: int) -> Product | None:
        stmt = select(products).where(products.c.id == product_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            return None
        return Product(
            id=row["id"],
            visible=bool(row["visible"]),
            ref=row["ref"],
            title=row["title"],
        )

    def find_variant(self, variant_id: int, product_id: int) -> StockVariant | None:
        """Fetch a sale element filtered on both its id and its owning product."""
        stmt = select(product_sale_elements).where(
            product_sale_elements.c.id == variant_id,
            product_sale_elements.c.product_id == product_id,
        )
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return _variant_from_row(row) if row is not None else None

    def list_variants(self, product_id: int) -> list[StockVariant]:
        stmt = (
            select(product_sale_elements)
            .where(product_sale_elements.c.product_id == product_id)
            .order_by(product_sale_elements.c.id)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_variant_from_row(row) for row in rows]

    def list_products(self, *, visible_only: bool = False) -> list[Product]:
        stmt = select(products).order_by(products.c.id)
        if visible_only:
            stmt = stmt.where(products.c.visible == 1)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [
            Product(id=row["id"], visible=bool(row["visible"]), ref=row["ref"], title=row["title"])
            for row in rows
        ]


def _variant_from_row(row: Any) -> StockVariant:
    return StockVariant(
        id=row["id"],
        product_id=row["product_id"],
        quantity=row["quantity"],
        ref=row["ref"],
    )
