"""CatalogService — products and their stock-carrying sale elements."""

from __future__ import annotations

import logging

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError

from storectl.infrastructure.database.schema import product_sale_elements, products
from storectl.services._helpers import now_iso
from storectl.services.base import BaseService
from storectl.services.result import ServiceResult, fail

logger = logging.getLogger(__name__)


class CatalogService(BaseService):
    """Maintains the catalog rows the cart validator reads."""

    def add_product(self, ref: str, *, title: str = "", visible: bool = True) -> ServiceResult:
        op = "add_product"
        ref = ref.strip()
        if not ref:
            return fail(op, "INVALID_REF", "Product reference must not be blank")

        now = now_iso()
        try:
            with self._store.transaction() as txn:
                result = txn.conn.execute(
                    insert(products).values(
                        ref=ref,
                        title=title,
                        visible=int(visible),
                        created=now,
                        modified=now,
                    )
                )
                product_id = result.inserted_primary_key[0]
        except IntegrityError:
            return fail(op, "DUPLICATE_REF", f"A product with ref {ref!r} already exists", ref=ref)

        logger.debug("Created product %s (%s)", product_id, ref)
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": product_id, "ref": ref, "title": title, "visible": visible},
        )

    def set_visibility(self, product_id: int, visible: bool) -> ServiceResult:
        op = "set_visibility"
        with self._store.transaction() as txn:
            result = txn.conn.execute(
                update(products)
                .where(products.c.id == product_id)
                .values(visible=int(visible), modified=now_iso())
            )
            if result.rowcount == 0:
                return fail(op, "NOT_FOUND", f"No product found with ID: {product_id}")
        return ServiceResult(ok=True, op=op, data={"id": product_id, "visible": visible})

    def add_variant(self, product_id: int, *, quantity: int = 0, ref: str = "") -> ServiceResult:
        op = "add_variant"
        if quantity < 0:
            return fail(op, "INVALID_QUANTITY", "Stock quantity must be greater than or equal to 0")

        now = now_iso()
        with self._store.transaction() as txn:
            exists = txn.conn.execute(
                select(products.c.id).where(products.c.id == product_id)
            ).first()
            if exists is None:
                return fail(op, "NOT_FOUND", f"No product found with ID: {product_id}")

            result = txn.conn.execute(
                insert(product_sale_elements).values(
                    product_id=product_id,
                    ref=ref,
                    quantity=quantity,
                    created=now,
                    modified=now,
                )
            )
            variant_id = result.inserted_primary_key[0]

        return ServiceResult(
            ok=True,
            op=op,
            data={"id": variant_id, "product_id": product_id, "ref": ref, "quantity": quantity},
        )

    def set_stock(self, variant_id: int, quantity: int) -> ServiceResult:
        op = "set_stock"
        if quantity < 0:
            return fail(op, "INVALID_QUANTITY", "Stock quantity must be greater than or equal to 0")

        with self._store.transaction() as txn:
            result = txn.conn.execute(
                update(product_sale_elements)
                .where(product_sale_elements.c.id == variant_id)
                .values(quantity=quantity, modified=now_iso())
            )
            if result.rowcount == 0:
                return fail(op, "NOT_FOUND", f"No sale element found with ID: {variant_id}")

        return ServiceResult(ok=True, op=op, data={"id": variant_id, "quantity": quantity})

    def get_product(self, product_id: int) -> ServiceResult:
        op = "get_product"
        catalog = self._store.catalog
        product = catalog.find_product(product_id)
        if product is None:
            return fail(op, "NOT_FOUND", f"No product found with ID: {product_id}")

        variants = catalog.list_variants(product_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **product.model_dump(),
                "variants": [v.model_dump() for v in variants],
            },
        )

    def list_products(self, *, visible_only: bool = False) -> ServiceResult:
        items = [p.model_dump() for p in self._store.catalog.list_products(visible_only=visible_only)]
        return ServiceResult(ok=True, op="list_products", data={"count": len(items), "items": items})
