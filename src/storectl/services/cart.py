"""CartService — cart line validation and persistence.

Pipeline for ``add_line``: VALIDATE → MERGE → PERSIST → DISPATCH

Validation is delegated to :class:`storectl.domain.cart.CartLineValidator`;
the ``verifyStock`` policy is read from store config exactly once per call.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import insert, select, update

from storectl.domain.cart import (
    CartLineRequest,
    CartLineValidator,
    StockCheckPolicy,
    ValidationResult,
)
from storectl.infrastructure.database.schema import cart_items
from storectl.plugins.hookspecs import StoreEvent
from storectl.services._helpers import now_iso
from storectl.services.base import BaseService
from storectl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

VERIFY_STOCK_KEY = "verifyStock"


class CartService(BaseService):
    """Validates cart lines against the catalog and writes accepted ones."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def stock_policy(self) -> StockCheckPolicy:
        """Current stock policy: config row first, then ``[cart] verify_stock``."""
        fallback = self._store.settings.cart.verify_stock
        return StockCheckPolicy(
            verify_stock=self._store.config.read_flag(VERIFY_STOCK_KEY, default=fallback)
        )

    def validate_line(self, request: CartLineRequest) -> ServiceResult:
        """Validate *request* without writing anything."""
        op = "validate_cart_line"
        policy = self.stock_policy()
        verdict = CartLineValidator(self._store.catalog, policy).validate(request)
        if not verdict.accepted:
            return _rejected(op, verdict)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "accepted": True,
                "verify_stock": policy.verify_stock,
                **request.model_dump(),
            },
        )

    def add_line(self, cart_token: str, request: CartLineRequest) -> ServiceResult:
        """Validate *request* and write it into the cart identified by *cart_token*.

        With ``newness`` set, or when the cart has no line for the same
        product and sale element, a new line is inserted. Otherwise the
        existing line's quantity is increased (``append``) or replaced.

        Stock is checked against the requested quantity only. With
        ``append`` the merged total is not re-checked, so a line can end
        up holding more units than the sale element has in stock.
        """
        op = "add_cart_line"
        warnings: list[str] = []

        # ── VALIDATE ─────────────────────────────────────────────
        verdict = CartLineValidator(self._store.catalog, self.stock_policy()).validate(request)
        if not verdict.accepted:
            return _rejected(op, verdict)

        now = now_iso()
        with self._store.transaction() as txn:
            # ── MERGE ────────────────────────────────────────────
            existing = None
            if not request.newness:
                existing = txn.conn.execute(
                    select(cart_items.c.id, cart_items.c.quantity).where(
                        cart_items.c.cart_token == cart_token,
                        cart_items.c.product_id == request.product_id,
                        _variant_clause(request.product_sale_elements_id),
                    )
                ).first()

            # ── PERSIST ──────────────────────────────────────────
            if existing is None:
                result = txn.conn.execute(
                    insert(cart_items).values(
                        cart_token=cart_token,
                        product_id=request.product_id,
                        product_sale_elements_id=request.product_sale_elements_id or None,
                        quantity=request.quantity,
                        created=now,
                        modified=now,
                    )
                )
                item_id = result.inserted_primary_key[0]
                quantity = request.quantity
                created = True
            else:
                item_id = existing.id
                quantity = (
                    existing.quantity + request.quantity if request.append else request.quantity
                )
                txn.conn.execute(
                    update(cart_items)
                    .where(cart_items.c.id == item_id)
                    .values(quantity=quantity, modified=now)
                )
                created = False

        logger.debug(
            "Cart %s line %s: product=%s quantity=%s",
            cart_token,
            item_id,
            request.product_id,
            quantity,
        )

        # ── DISPATCH ─────────────────────────────────────────────
        self._dispatch_event(
            StoreEvent.CART_ADD,
            {
                "cart_token": cart_token,
                "item_id": item_id,
                "product_id": request.product_id,
                "product_sale_elements_id": request.product_sale_elements_id or None,
                "quantity": quantity,
            },
            warnings,
        )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": item_id,
                "cart_token": cart_token,
                "product_id": request.product_id,
                "product_sale_elements_id": request.product_sale_elements_id or None,
                "quantity": quantity,
                "created": created,
            },
            warnings=warnings,
        )

    def list_lines(self, cart_token: str) -> ServiceResult:
        stmt = (
            select(
                cart_items.c.id,
                cart_items.c.product_id,
                cart_items.c.product_sale_elements_id,
                cart_items.c.quantity,
                cart_items.c.modified,
            )
            .where(cart_items.c.cart_token == cart_token)
            .order_by(cart_items.c.id)
        )
        with self._store.engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        items: list[dict[str, Any]] = [dict(row) for row in rows]
        return ServiceResult(
            ok=True,
            op="list_cart_lines",
            data={"cart_token": cart_token, "count": len(items), "items": items},
        )


def _variant_clause(variant_id: int | None) -> Any:
    if variant_id:
        return cart_items.c.product_sale_elements_id == variant_id
    return cart_items.c.product_sale_elements_id.is_(None)


def _rejected(op: str, verdict: ValidationResult) -> ServiceResult:
    violations = [v.model_dump(mode="json") for v in verdict.violations]
    message = "; ".join(f"{v.field}: {v.message}" for v in verdict.violations)
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="VALIDATION_FAILED",
            message=message,
            detail={
                "violations": violations,
                "request": verdict.request.model_dump(),
            },
        ),
    )
