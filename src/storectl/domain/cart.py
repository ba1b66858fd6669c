"""Cart line requests and their stock-aware validation.

A cart line names a product, optionally one of its sale elements (the
variant), a quantity, and two pass-through flags. :class:`CartLineValidator`
checks it against the catalog and the stock policy and returns a
:class:`ValidationResult`. It never raises for a bad request and never
writes anything.

Check order (all checks run, violations accumulate):

1. product exists and is visible          -> ``product``
2. variant belongs to the product         -> ``product_sale_elements_id``
3. quantity is not negative               -> ``quantity``
4. quantity fits the variant's stock      -> ``quantity`` (policy-gated)

The variant is looked up once and reused by checks 2 and 4. A variant that
cannot be found is reported once by check 2; check 4 is then skipped.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel

from storectl.domain.catalog import Product, StockVariant

FIELD_PRODUCT = "product"
FIELD_VARIANT = "product_sale_elements_id"
FIELD_QUANTITY = "quantity"

INSUFFICIENT_STOCK_MESSAGE = "quantity value is not valid"


class ViolationKind(StrEnum):
    """Kinds of cart line validation failure."""

    PRODUCT_NOT_FOUND = "product_not_found"
    STOCK_NOT_FOUND = "stock_not_found"
    INVALID_QUANTITY = "invalid_quantity"
    INSUFFICIENT_STOCK = "insufficient_stock"


class CartLineRequest(BaseModel):
    """A proposed cart line, as submitted by the cart-add form."""

    model_config = {"frozen": True}

    product_id: int
    product_sale_elements_id: int | None = None
    quantity: int
    append: bool = False
    newness: bool = False

    @property
    def has_variant(self) -> bool:
        """True when a variant was selected (absent and ``0`` both mean none)."""
        return bool(self.product_sale_elements_id)


class Violation(BaseModel):
    """One field-scoped validation failure."""

    model_config = {"frozen": True}

    field: str
    kind: ViolationKind
    message: str


class ValidationResult(BaseModel):
    """Verdict on a :class:`CartLineRequest`.

    Accepted when ``violations`` is empty; the request is carried through
    unchanged either way so callers can re-render the form.
    """

    model_config = {"frozen": True}

    request: CartLineRequest
    violations: tuple[Violation, ...] = ()

    @property
    def accepted(self) -> bool:
        return not self.violations

    def kinds(self) -> list[ViolationKind]:
        return [v.kind for v in self.violations]

    def for_field(self, field: str) -> list[Violation]:
        """Violations attached to *field*, in check order."""
        return [v for v in self.violations if v.field == field]


class StockCheckPolicy(BaseModel):
    """Whether requested quantities are checked against available stock."""

    model_config = {"frozen": True}

    verify_stock: bool = True


class CatalogLookup(Protocol):
    """Read-only catalog access needed by the validator."""

    def find_product(self, product_id: int) -> Product | None: ...

    def find_variant(self, variant_id: int, product_id: int) -> StockVariant | None:
        """Return the variant only if it exists AND belongs to *product_id*."""
        ...


class CartLineValidator:
    """Validate cart lines against catalog state and a stock policy.

    Stateless between calls; lookup errors from *catalog* propagate
    unchanged since they are infrastructure failures, not bad input.
    """

    def __init__(self, catalog: CatalogLookup, policy: StockCheckPolicy | None = None) -> None:
        self._catalog = catalog
        self._policy = policy or StockCheckPolicy()

    @property
    def policy(self) -> StockCheckPolicy:
        return self._policy

    def validate(self, request: CartLineRequest) -> ValidationResult:
        violations: list[Violation] = []

        product = self._catalog.find_product(request.product_id)
        if product is None or not product.visible:
            violations.append(
                Violation(
                    field=FIELD_PRODUCT,
                    kind=ViolationKind.PRODUCT_NOT_FOUND,
                    message=f"This product id does not exist: {request.product_id}",
                )
            )

        variant: StockVariant | None = None
        if request.has_variant:
            assert request.product_sale_elements_id is not None
            variant = self._catalog.find_variant(
                request.product_sale_elements_id, request.product_id
            )
            if variant is None:
                violations.append(
                    Violation(
                        field=FIELD_VARIANT,
                        kind=ViolationKind.STOCK_NOT_FOUND,
                        message=(
                            "This product_sale_elements_id does not exist for this product: "
                            f"{request.product_sale_elements_id}"
                        ),
                    )
                )

        if request.quantity < 0:
            violations.append(
                Violation(
                    field=FIELD_QUANTITY,
                    kind=ViolationKind.INVALID_QUANTITY,
                    message="This value should be greater than or equal to 0.",
                )
            )

        if (
            variant is not None
            and self._policy.verify_stock
            and variant.quantity < request.quantity
        ):
            violations.append(
                Violation(
                    field=FIELD_QUANTITY,
                    kind=ViolationKind.INSUFFICIENT_STOCK,
                    message=INSUFFICIENT_STOCK_MESSAGE,
                )
            )

        return ValidationResult(request=request, violations=tuple(violations))
