"""Command group: persisted store configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from storectl.commands._base import StoreGroup

if TYPE_CHECKING:
    from storectl.commands._context import AppContext

_CONFIG_EXAMPLES = """\
  storectl config set verifyStock 0
  storectl config get verifyStock
  storectl config store-save --set store_name="Corner Shop" --set store_email=shop@example.com
  storectl config store-show"""


@click.group(cls=StoreGroup, examples=_CONFIG_EXAMPLES)
@click.pass_obj
def config(app: AppContext) -> None:
    """Read and write store configuration values."""


@config.command(examples="  storectl config get verifyStock")
@click.argument("name")
@click.pass_obj
def get(app: AppContext, name: str) -> None:
    """Show one configuration value."""
    from storectl.services.store_config import StoreConfigService

    app.emit(StoreConfigService(app.store).get(name))


@config.command(
    "set",
    examples="""\
  storectl config set verifyStock 0
  storectl config set smtp_password s3cret --secured --hidden""",
)
@click.argument("name")
@click.argument("value")
@click.option("--secured/--not-secured", default=None, help="Mark the value as secured.")
@click.option("--hidden/--visible", default=None, help="Hide the value from listings.")
@click.pass_obj
def set_cmd(
    app: AppContext,
    name: str,
    value: str,
    secured: bool | None,
    hidden: bool | None,
) -> None:
    """Write one configuration value."""
    from storectl.services.store_config import StoreConfigService

    app.emit(StoreConfigService(app.store).set(name, value, secured=secured, hidden=hidden))


@config.command(
    "list",
    examples="""\
  storectl config list
  storectl config list --no-hidden""",
)
@click.option("--hidden/--no-hidden", default=True, help="Include hidden values.")
@click.pass_obj
def list_cmd(app: AppContext, hidden: bool) -> None:
    """List configuration values."""
    from storectl.services.store_config import StoreConfigService

    app.emit(StoreConfigService(app.store).list_values(include_hidden=hidden))


@config.command("store-show", examples="  storectl config store-show")
@click.pass_obj
def store_show(app: AppContext) -> None:
    """Show the store identity settings."""
    from storectl.services.store_config import StoreConfigService

    app.emit(StoreConfigService(app.store).show_store())


@config.command(
    "store-save",
    examples="""\
  storectl config store-save --set store_name="Corner Shop" --set store_email=shop@example.com
  storectl config store-save --set store_name=Shop --set store_email=a@b.io --set store_city=Lyon""",
)
@click.option(
    "--set",
    "pairs",
    multiple=True,
    metavar="FIELD=VALUE",
    help="Form field to submit (repeatable).",
)
@click.pass_obj
def store_save(app: AppContext, pairs: tuple[str, ...]) -> None:
    """Validate and save the store identity form."""
    from storectl.services.store_config import StoreConfigService

    submitted: dict[str, str] = {}
    for pair in pairs:
        field, sep, value = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"expected FIELD=VALUE, got {pair!r}", param_hint="--set")
        submitted[field.strip()] = value
    app.emit(StoreConfigService(app.store).save_store(submitted))
