"""Command group: catalog maintenance (products and sale elements)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from storectl.commands._base import StoreGroup

if TYPE_CHECKING:
    from storectl.commands._context import AppContext

_CATALOG_EXAMPLES = """\
  storectl catalog add-product TSHIRT-01 --title "Plain T-shirt"
  storectl catalog add-variant 1 --quantity 12 --ref TSHIRT-01-M
  storectl catalog set-stock 3 0
  storectl --json catalog show 1"""


@click.group(cls=StoreGroup, examples=_CATALOG_EXAMPLES)
@click.pass_obj
def catalog(app: AppContext) -> None:
    """Manage products and their stock."""


@catalog.command(
    "add-product",
    examples="""\
  storectl catalog add-product TSHIRT-01
  storectl catalog add-product MUG-02 --title "Coffee mug" --hidden""",
)
@click.argument("ref")
@click.option("--title", default="", help="Display title.")
@click.option("--hidden", is_flag=True, help="Create the product invisible.")
@click.pass_obj
def add_product(app: AppContext, ref: str, title: str, hidden: bool) -> None:
    """Create a product."""
    from storectl.services.catalog import CatalogService

    app.emit(CatalogService(app.store).add_product(ref, title=title, visible=not hidden))


@catalog.command(
    "add-variant",
    examples="""\
  storectl catalog add-variant 1 --quantity 12
  storectl catalog add-variant 1 --quantity 0 --ref TSHIRT-01-XL""",
)
@click.argument("product_id", type=int)
@click.option("--quantity", type=int, default=0, show_default=True, help="Units in stock.")
@click.option("--ref", default="", help="Sale element reference.")
@click.pass_obj
def add_variant(app: AppContext, product_id: int, quantity: int, ref: str) -> None:
    """Add a sale element (stock-carrying variant) to a product."""
    from storectl.services.catalog import CatalogService

    app.emit(CatalogService(app.store).add_variant(product_id, quantity=quantity, ref=ref))


@catalog.command("set-stock", examples="  storectl catalog set-stock 3 25")
@click.argument("variant_id", type=int)
@click.argument("quantity", type=int)
@click.pass_obj
def set_stock(app: AppContext, variant_id: int, quantity: int) -> None:
    """Set the stock quantity of a sale element."""
    from storectl.services.catalog import CatalogService

    app.emit(CatalogService(app.store).set_stock(variant_id, quantity))


@catalog.command(
    "set-visibility",
    examples="""\
  storectl catalog set-visibility 1 --hidden
  storectl catalog set-visibility 1 --visible""",
)
@click.argument("product_id", type=int)
@click.option("--visible/--hidden", default=True, help="Target visibility.")
@click.pass_obj
def set_visibility(app: AppContext, product_id: int, visible: bool) -> None:
    """Show or hide a product."""
    from storectl.services.catalog import CatalogService

    app.emit(CatalogService(app.store).set_visibility(product_id, visible))


@catalog.command(examples="  storectl catalog show 1")
@click.argument("product_id", type=int)
@click.pass_obj
def show(app: AppContext, product_id: int) -> None:
    """Show a product and its sale elements."""
    from storectl.services.catalog import CatalogService

    app.emit(CatalogService(app.store).get_product(product_id))


@catalog.command(
    "list",
    examples="""\
  storectl catalog list
  storectl -q catalog list --visible-only""",
)
@click.option("--visible-only", is_flag=True, help="Skip hidden products.")
@click.pass_obj
def list_cmd(app: AppContext, visible_only: bool) -> None:
    """List products."""
    from storectl.services.catalog import CatalogService

    app.emit(CatalogService(app.store).list_products(visible_only=visible_only))
