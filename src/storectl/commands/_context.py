"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands through
``@click.pass_obj``. Opens the Store lazily and routes results to
stdout or stderr with the right exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from storectl.config.logging import bind_store, configure_logging, unbind_store
from storectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from storectl.config.settings import StoreSettings
    from storectl.infrastructure.store import Store
    from storectl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is opened on first access so ``--help``, ``--version`` and
    ``init`` never touch an existing database.
    """

    def __init__(self, settings: StoreSettings) -> None:
        self.settings = settings
        self._store: Store | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def store(self) -> Store:
        """The store instance (created lazily on first access)."""
        if self._store is None:
            from storectl.infrastructure.store import Store

            self._store = Store(self.settings)
            self._store.init_event_bus(sync=self.settings.sync)
            bind_store(self._store.root, self.settings.store.name)
        return self._store

    def close(self) -> None:
        """Drain pending plugin events and release the database."""
        if self._store is not None:
            self._store.close()
            self._store = None
            unbind_store()

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout; warnings go to stderr unless JSON output is on.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # JSON output already carries the warnings list.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
