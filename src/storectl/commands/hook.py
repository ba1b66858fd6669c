"""Command group: hook records."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

import click

from storectl.commands._base import StoreGroup

P = ParamSpec("P")
R = TypeVar("R")

if TYPE_CHECKING:
    from storectl.commands._context import AppContext
    from storectl.domain.hooks import HookFields

_HOOK_TYPES = ["front", "back", "pdf", "email"]

_HOOK_EXAMPLES = """\
  storectl hook create product.top
  storectl hook create order-invoice.after-products --type pdf
  storectl hook toggle-activation 4
  storectl hook list --type front --active"""


@click.group(cls=StoreGroup, examples=_HOOK_EXAMPLES)
@click.pass_obj
def hook(app: AppContext) -> None:
    """Manage hook records."""


def _hook_field_options(fn: Callable[P, R]) -> Callable[P, R]:
    """Apply the full set of writable hook attributes as flags."""
    fn = click.option("--description", default="", help="Long description.")(fn)
    fn = click.option("--chapo", default="", help="Short summary.")(fn)
    fn = click.option("--title", default="", help="Human-readable title.")(fn)
    fn = click.option("--by-module", is_flag=True, help="Modules register per hook instance.")(fn)
    fn = click.option("--block", is_flag=True, help="Hook renders a block.")(fn)
    fn = click.option("--inactive", is_flag=True, help="Create the hook deactivated.")(fn)
    fn = click.option("--native", is_flag=True, help="Mark as a core hook.")(fn)
    fn = click.option("--locale", default=None, help="Locale of the text fields.")(fn)
    fn = click.option(
        "--type",
        "hook_type",
        type=click.Choice(_HOOK_TYPES, case_sensitive=False),
        default="front",
        show_default=True,
        help="Hook location.",
    )(fn)
    fn = click.argument("code")(fn)
    return fn


def _build_fields(app: AppContext, op: str, options: dict[str, Any]) -> HookFields:
    """Build HookFields from command flags; invalid flags end the command with a failure."""
    from pydantic import ValidationError

    from storectl.domain.hooks import HookFields, HookType
    from storectl.services.result import fail

    try:
        fields = HookFields(
            code=options["code"],
            type=HookType.from_name(options["hook_type"]),
            locale=options["locale"] or app.settings.store.locale,
            native=options["native"],
            active=not options["inactive"],
            block=options["block"],
            by_module=options["by_module"],
            title=options["title"],
            chapo=options["chapo"],
            description=options["description"],
        )
    except ValidationError as exc:
        app.emit(fail(op, "VALIDATION_FAILED", str(exc)))
        raise SystemExit(1) from exc
    return fields


@hook.command(
    examples="""\
  storectl hook create product.top
  storectl hook create account.bottom --type front --title Footer""",
)
@click.argument("code")
@click.option(
    "--type",
    "hook_type",
    type=click.Choice(_HOOK_TYPES, case_sensitive=False),
    default="front",
    show_default=True,
    help="Hook location.",
)
@click.option("--locale", default=None, help="Locale of the title.")
@click.option("--native", is_flag=True, help="Mark as a core hook.")
@click.option("--inactive", is_flag=True, help="Create the hook deactivated.")
@click.option("--title", default="", help="Human-readable title.")
@click.pass_obj
def create(
    app: AppContext,
    code: str,
    hook_type: str,
    locale: str | None,
    native: bool,
    inactive: bool,
    title: str,
) -> None:
    """Create a hook and clear the template cache."""
    from storectl.domain.hooks import HookType
    from storectl.services.hooks import HookService

    app.emit(
        HookService(app.store).create(
            code,
            HookType.from_name(hook_type),
            locale=locale,
            native=native,
            active=not inactive,
            title=title,
        )
    )


@hook.command(
    "create-all",
    examples="""\
  storectl hook create-all product.tabs --block --by-module --title Tabs""",
)
@_hook_field_options
@click.pass_obj
def create_all(app: AppContext, **options: Any) -> None:
    """Create a hook with every attribute set."""
    from storectl.services.hooks import HookService

    fields = _build_fields(app, "hook_create_all", options)
    app.emit(HookService(app.store).create_all(fields))


@hook.command(
    examples="""\
  storectl hook update 4 product.top --title "Above product" --native""",
)
@click.argument("hook_id", type=int)
@_hook_field_options
@click.pass_obj
def update(app: AppContext, hook_id: int, **options: Any) -> None:
    """Replace every attribute of a hook."""
    from storectl.services.hooks import HookService

    fields = _build_fields(app, "hook_update", options)
    app.emit(HookService(app.store).update(hook_id, fields))


@hook.command(examples="  storectl hook delete 4")
@click.argument("hook_id", type=int)
@click.pass_obj
def delete(app: AppContext, hook_id: int) -> None:
    """Delete a hook."""
    from storectl.services.hooks import HookService

    app.emit(HookService(app.store).delete(hook_id))


@hook.command(examples="  storectl hook deactivate 4")
@click.argument("hook_id", type=int)
@click.pass_obj
def deactivate(app: AppContext, hook_id: int) -> None:
    """Force a hook inactive."""
    from storectl.services.hooks import HookService

    app.emit(HookService(app.store).deactivate(hook_id))


@hook.command("toggle-native", examples="  storectl hook toggle-native 4")
@click.argument("hook_id", type=int)
@click.pass_obj
def toggle_native(app: AppContext, hook_id: int) -> None:
    """Flip a hook's native flag."""
    from storectl.services.hooks import HookService

    app.emit(HookService(app.store).toggle_native(hook_id))


@hook.command("toggle-activation", examples="  storectl hook toggle-activation 4")
@click.argument("hook_id", type=int)
@click.pass_obj
def toggle_activation(app: AppContext, hook_id: int) -> None:
    """Flip a hook's active flag and clear the template cache."""
    from storectl.services.hooks import HookService

    app.emit(HookService(app.store).toggle_activation(hook_id))


@hook.command(examples="  storectl --json hook get 4")
@click.argument("hook_id", type=int)
@click.pass_obj
def get(app: AppContext, hook_id: int) -> None:
    """Show one hook."""
    from storectl.services.hooks import HookService

    app.emit(HookService(app.store).get(hook_id))


@hook.command(
    "list",
    examples="""\
  storectl hook list
  storectl hook list --type pdf
  storectl -q hook list --inactive""",
)
@click.option(
    "--type",
    "hook_type",
    type=click.Choice(_HOOK_TYPES, case_sensitive=False),
    default=None,
    help="Only hooks of this type.",
)
@click.option("--active/--inactive", default=None, help="Filter on the active flag.")
@click.pass_obj
def list_cmd(app: AppContext, hook_type: str | None, active: bool | None) -> None:
    """List hooks."""
    from storectl.domain.hooks import HookType
    from storectl.services.hooks import HookService

    app.emit(
        HookService(app.store).list_hooks(
            hook_type=HookType.from_name(hook_type) if hook_type else None,
            active=active,
        )
    )
