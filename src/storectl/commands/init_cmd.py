"""Command: store initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from storectl.commands._base import StoreCommand

if TYPE_CHECKING:
    from storectl.commands._context import AppContext

_INIT_EXAMPLES = """\
  storectl init
  storectl init /srv/shop --name "Corner Shop"
  storectl init . --locale fr_FR --no-verify-stock"""


@click.command("init", cls=StoreCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--name", default=None, help="Store name (defaults to the directory name).")
@click.option("--locale", default="en_US", show_default=True, help="Default locale.")
@click.option(
    "--verify-stock/--no-verify-stock",
    default=True,
    show_default=True,
    help="Reject cart lines that exceed available stock.",
)
@click.pass_obj
def init_cmd(
    app: AppContext,
    path: str,
    name: str | None,
    locale: str,
    verify_stock: bool,
) -> None:
    """Initialize a new store."""
    from storectl.services.init import InitService

    store_path = Path(path).resolve()
    app.emit(
        InitService.init_store(
            store_path,
            name=name or store_path.name,
            locale=locale,
            verify_stock=verify_stock,
        )
    )
