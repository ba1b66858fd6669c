"""Subcommand modules for storectl.

Provides register_commands(), which imports command modules lazily to
keep ``storectl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from storectl.commands.cart import cart
    from storectl.commands.catalog import catalog
    from storectl.commands.config import config
    from storectl.commands.customer import customer
    from storectl.commands.hook import hook

    cli.add_command(catalog)
    cli.add_command(cart)
    cli.add_command(hook)
    cli.add_command(config)
    cli.add_command(customer)

    # --- Standalone commands ---
    from storectl.commands.init_cmd import init_cmd
    from storectl.commands.upgrade import upgrade

    cli.add_command(init_cmd)
    cli.add_command(upgrade)
