"""Command group: cart lines.

``validate`` runs the stock-aware checks without writing; ``add`` runs the
same checks and then merges the line into the cart.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, ParamSpec, TypeVar

import click

from storectl.commands._base import StoreGroup

P = ParamSpec("P")
R = TypeVar("R")

if TYPE_CHECKING:
    from storectl.commands._context import AppContext
    from storectl.domain.cart import CartLineRequest

_CART_EXAMPLES = """\
  storectl cart validate 1 --variant 3 --quantity 2
  storectl cart add 1 --variant 3 --quantity 2 --cart guest-42
  storectl cart add 1 --variant 3 --quantity 1 --cart guest-42 --append
  storectl cart show guest-42"""

_DEFAULT_CART = "default"


def _line_options(fn: Callable[P, R]) -> Callable[P, R]:
    """Apply the cart line flags shared by ``validate`` and ``add``."""
    fn = click.option("--newness", is_flag=True, help="Always start a new cart line.")(fn)
    fn = click.option("--append", is_flag=True, help="Add to an existing line's quantity.")(fn)
    fn = click.option("--quantity", type=int, required=True, help="Requested quantity.")(fn)
    fn = click.option(
        "--variant",
        "variant_id",
        type=int,
        default=None,
        help="Sale element (product_sale_elements_id).",
    )(fn)
    fn = click.argument("product_id", type=int)(fn)
    return fn


def _build_request(
    product_id: int,
    variant_id: int | None,
    quantity: int,
    append: bool,
    newness: bool,
) -> CartLineRequest:
    from storectl.domain.cart import CartLineRequest

    return CartLineRequest(
        product_id=product_id,
        product_sale_elements_id=variant_id,
        quantity=quantity,
        append=append,
        newness=newness,
    )


@click.group(cls=StoreGroup, examples=_CART_EXAMPLES)
@click.pass_obj
def cart(app: AppContext) -> None:
    """Validate and add cart lines."""


@cart.command(
    examples="""\
  storectl cart validate 1 --quantity 1
  storectl --json cart validate 1 --variant 3 --quantity 50""",
)
@_line_options
@click.pass_obj
def validate(
    app: AppContext,
    product_id: int,
    variant_id: int | None,
    quantity: int,
    append: bool,
    newness: bool,
) -> None:
    """Check a cart line against the catalog without writing it."""
    from storectl.services.cart import CartService

    request = _build_request(product_id, variant_id, quantity, append, newness)
    app.emit(CartService(app.store).validate_line(request))


@cart.command(
    examples="""\
  storectl cart add 1 --variant 3 --quantity 2
  storectl cart add 1 --variant 3 --quantity 2 --cart guest-42 --append
  storectl cart add 1 --variant 3 --quantity 1 --cart guest-42 --newness""",
)
@_line_options
@click.option("--cart", "cart_token", default=_DEFAULT_CART, show_default=True, help="Cart token.")
@click.pass_obj
def add(
    app: AppContext,
    product_id: int,
    variant_id: int | None,
    quantity: int,
    append: bool,
    newness: bool,
    cart_token: str,
) -> None:
    """Validate a cart line and write it into a cart."""
    from storectl.services.cart import CartService

    request = _build_request(product_id, variant_id, quantity, append, newness)
    app.emit(CartService(app.store).add_line(cart_token, request))


@cart.command(examples="  storectl cart show guest-42")
@click.argument("cart_token", required=False, default=_DEFAULT_CART)
@click.pass_obj
def show(app: AppContext, cart_token: str) -> None:
    """List the lines of a cart."""
    from storectl.services.cart import CartService

    app.emit(CartService(app.store).list_lines(cart_token))
