"""BaseService — foundation for all storectl services.

Every service receives a :class:`Store` at construction time. The Store
provides the database engine, read repositories, and the event bus.
Services own their transaction boundaries via ``self._store.transaction()``
and report what changed by dispatching a :class:`StoreEvent` afterwards.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from storectl.infrastructure.store import Store
    from storectl.plugins.hookspecs import StoreEvent

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class CatalogService(BaseService):
            def add_product(self, ref: str, ...) -> ServiceResult:
                with self._store.transaction() as txn:
                    ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    def _dispatch_event(
        self,
        event: StoreEvent,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Hand *event* to the plugins once the write has committed.

        Does nothing when the store has no event bus. A bus that cannot
        journal the event adds a warning; the write itself stands.
        """
        bus = self._store.event_bus
        if bus is None:
            return
        try:
            bus.dispatch(event, payload)
        except Exception:
            logger.debug("Could not dispatch %s", event, exc_info=True)
            warnings.append(f"Event dispatch failed for {event}")
