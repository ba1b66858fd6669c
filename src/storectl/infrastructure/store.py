"""Store — the repository object every service receives.

The Store owns the database engine and the plugin event bus. Writes go
through :meth:`Store.transaction`, which yields a :class:`StoreTransaction`
bound to a single ``engine.begin()`` connection: commit on success,
rollback on any exception.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import insert, select, update

from storectl.infrastructure.database.engine import db_path_for, init_database
from storectl.infrastructure.database.schema import admin_log, config
from storectl.infrastructure.repositories import CatalogRepository, ConfigRepository

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from storectl.config.settings import StoreSettings
    from storectl.plugins.event_bus import EventBus

logger = logging.getLogger(__name__)


@dataclass
class StoreTransaction:
    """Active transaction with write helpers shared across services."""

    conn: Connection

    def write_config(
        self,
        name: str,
        value: str,
        now: str,
        *,
        secured: bool | None = None,
        hidden: bool | None = None,
    ) -> bool:
        """Insert or update a config row. Returns True if the row was created.

        *secured* and *hidden* are only applied when given; an update
        otherwise keeps the row's existing flags.
        """
        existing = self.conn.execute(select(config.c.name).where(config.c.name == name)).first()
        if existing is None:
            self.conn.execute(
                insert(config).values(
                    name=name,
                    value=value,
                    secured=int(True if secured is None else secured),
                    hidden=int(True if hidden is None else hidden),
                    created=now,
                    modified=now,
                )
            )
            return True

        values: dict[str, object] = {"value": value, "modified": now}
        if secured is not None:
            values["secured"] = int(secured)
        if hidden is not None:
            values["hidden"] = int(hidden)
        self.conn.execute(update(config).where(config.c.name == name).values(**values))
        return False

    def append_admin_log(self, resource: str, action: str, message: str, now: str) -> None:
        """Record a back-office action in ``admin_log``."""
        self.conn.execute(
            insert(admin_log).values(resource=resource, action=action, message=message, created=now)
        )


class Store:
    """Repository encapsulating database and plugin access for one store root.

    Constructed lazily by the CLI from :class:`StoreSettings`. Services
    receive the Store via their :class:`BaseService` constructor.
    """

    def __init__(self, settings: StoreSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(self.root)
        self._event_bus: EventBus | None = None

    @property
    def root(self) -> Path:
        """The store root directory."""
        return self._settings.store_root

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def settings(self) -> StoreSettings:
        return self._settings

    @property
    def db_path(self) -> Path:
        return db_path_for(self.root)

    @property
    def event_bus(self) -> EventBus | None:
        """The plugin event bus (None if not initialized)."""
        return self._event_bus

    @property
    def catalog(self) -> CatalogRepository:
        return CatalogRepository(self._engine)

    @property
    def config(self) -> ConfigRepository:
        return ConfigRepository(self._engine)

    def init_event_bus(self, *, sync: bool = False) -> list[str]:
        """Load the store's plugins and start the event bus.

        Returns the names of the registered plugins.
        """
        from storectl.plugins.event_bus import EventBus
        from storectl.plugins.manager import PluginManager

        plugins = PluginManager()
        names = plugins.load(
            self.root, cache_enabled=self._settings.plugins.cache.get("enabled", True)
        )
        logger.debug("Plugins for %s: %s", self.root, names)

        events = self._settings.events
        self._event_bus = EventBus(
            self._engine,
            plugins,
            sync=sync,
            max_retries=events.max_retries,
            max_workers=events.max_workers,
        )
        return names

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Run a block inside one database transaction.

        Usage::

            with store.transaction() as txn:
                txn.conn.execute(insert(products).values(...))
                txn.write_config("verifyStock", "1", now)
        """
        with self._engine.begin() as conn:
            yield StoreTransaction(conn=conn)

    def close(self) -> None:
        """Retry undelivered events once, then release the engine."""
        if self._event_bus is not None:
            report = self._event_bus.close()
            self._event_bus = None
            if report.dead_letter:
                logger.warning(
                    "Gave up on %d plugin event(s): %s",
                    len(report.dead_letter),
                    report.dead_letter,
                )
        self._engine.dispose()
