"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from storectl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from storectl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    elif result.error is not None and "violations" in result.error.detail:
        _render_violations(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict) and "id" in item)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="store.ok")
    op = Text(f"  {result.op}", style="store.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="store.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="store.id")
    elif isinstance(value, bool):
        v = Text("yes" if value else "no", style="store.on" if value else "store.off")
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_warnings_meta(console: Console, result: ServiceResult, *, verbose: bool) -> None:
    if verbose and result.meta:
        console.print(Text("  meta:", style="dim"))
        for k, v in result.meta.items():
            console.print(Text(f"    {k}: {v}"))


# ── Error renderers ───────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="store.error")
    op = Text(f"  {result.op}", style="store.op")
    console.print(label, op, Text(" — "), Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_violations(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a rejected cart line: one row per field-scoped violation."""
    assert result.error is not None
    label = Text("ERROR", style="store.error")
    op = Text(f"  {result.op}", style="store.op")
    console.print(label, op, Text(" — "), Text("cart line rejected"))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="store.field", no_wrap=True)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Message")
    for violation in result.error.detail["violations"]:
        table.add_row(
            Text(str(violation.get("field", ""))),
            Text(str(violation.get("kind", ""))),
            Text(str(violation.get("message", ""))),
        )
    console.print(table)

    if verbose:
        request = result.error.detail.get("request")
        if request:
            console.print(Text("  request:", style="dim"))
            for k, v in request.items():
                console.print(Text(f"    {k}: {v}"))


# ── Success renderers ─────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    _render_warnings_meta(console, result, verbose=verbose)


def _render_cart_line(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    keys = ("id", "cart_token", "product_id", "product_sale_elements_id", "quantity")
    for key in keys:
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        for key in ("append", "newness", "verify_stock", "created", "accepted"):
            if key in result.data:
                _field(console, key, result.data[key])
        _render_warnings_meta(console, result, verbose=verbose)


def _render_hook(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("id", "code", "type", "active", "native", "title"):
        if key in result.data:
            _field(console, key, result.data[key])
    if result.data.get("cache_cleared"):
        console.print(Text("  cache cleared", style="dim"))
    if verbose:
        for key in ("block", "by_module", "locale", "chapo", "description", "modified"):
            if key in result.data:
                _field(console, key, result.data[key])


def _render_table(
    result: ServiceResult,
    console: Console,
    columns: tuple[str, ...],
) -> None:
    items: list[dict[str, Any]] = result.data.get("items", [])
    _status_line(console, result)
    if not items:
        console.print(Text("  (none)", style="dim"))
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for col in columns:
        table.add_column(col.replace("_", " ").title(), style="store.id" if col == "id" else None)
    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))
    console.print(table)


def _cell(value: Any) -> Text:
    if value is None:
        return Text("-", style="dim")
    if isinstance(value, bool):
        return Text("yes" if value else "no")
    return Text(str(value))


def _render_hook_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    columns: tuple[str, ...] = ("id", "code", "type", "active", "native", "title")
    if verbose:
        columns += ("block", "by_module", "locale")
    _render_table(result, console, columns)


def _render_product_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _render_table(result, console, ("id", "ref", "title", "visible"))


def _render_cart_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    columns: tuple[str, ...] = ("id", "product_id", "product_sale_elements_id", "quantity")
    if verbose:
        columns += ("modified",)
    _render_table(result, console, columns)


def _render_product(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("id", "ref", "title", "visible"):
        _field(console, key, result.data.get(key))
    variants = result.data.get("variants", [])
    if variants:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Sale element", style="store.id")
        table.add_column("Ref")
        table.add_column("Stock", justify="right")
        for v in variants:
            table.add_row(Text(str(v["id"])), Text(str(v.get("ref", ""))), Text(str(v["quantity"])))
        console.print(table)


def _render_config_values(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for name, value in result.data.get("values", {}).items():
        _field(console, name, value)


def _render_upgrade(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    if "pending" in d:
        _field(console, "current", d.get("current"))
        _field(console, "head", d.get("head"))
        _field(console, "pending_count", d.get("pending_count"))
        for rev in d["pending"]:
            console.print(Text(f"    {rev['revision']}  {rev['description']}".rstrip()))
        return
    for key in ("applied_count", "current", "backup_path", "message", "stamped"):
        if key in d:
            _field(console, key, d[key])


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Cart
    "validate_cart_line": _render_cart_line,
    "add_cart_line": _render_cart_line,
    "list_cart_lines": _render_cart_list,
    # Catalog
    "get_product": _render_product,
    "list_products": _render_product_list,
    # Hooks
    "hook_create": _render_hook,
    "hook_create_all": _render_hook,
    "hook_update": _render_hook,
    "hook_delete": _render_hook,
    "hook_deactivate": _render_hook,
    "hook_toggle_native": _render_hook,
    "hook_toggle_activation": _render_hook,
    "hook_get": _render_hook,
    "hook_list": _render_hook_list,
    # Config
    "config_list": _render_config_values,
    # Maintenance
    "upgrade": _render_upgrade,
}
