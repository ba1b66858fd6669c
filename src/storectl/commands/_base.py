"""Click command classes that take an ``examples=`` text.

``storectl cart add --examples`` prints the text and exits, so ``--help``
stays a short option list.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(ctx.command.examples)  # type: ignore[attr-defined]
    ctx.exit(0)


class _ExamplesMixin:
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(  # type: ignore[attr-defined]
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_print_examples,
                    help="Show usage examples.",
                )
            )


class StoreCommand(_ExamplesMixin, click.Command):
    pass


class StoreGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands default to :class:`StoreCommand`."""

    command_class = StoreCommand
