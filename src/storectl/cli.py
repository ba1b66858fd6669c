"""Root CLI group for storectl with global flags and command registration."""

from __future__ import annotations

import click

from storectl import __version__
from storectl.commands import register_commands
from storectl.commands._base import StoreGroup
from storectl.commands._context import AppContext
from storectl.config.settings import StoreSettings


@click.group(
    cls=StoreGroup,
    invoke_without_command=True,
    examples="""\
  storectl init /srv/acme --name Acme
  storectl --json catalog show 1
  storectl -c /srv/acme/storectl.toml cart add 1 --variant 3 --quantity 2""",
)
@click.version_option(version=__version__, prog_name="storectl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--sync", is_flag=True, help="Force synchronous event dispatch.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    sync: bool,
) -> None:
    """Manage a storefront's catalog, carts, hooks and configuration."""
    settings = StoreSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        sync=sync,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
