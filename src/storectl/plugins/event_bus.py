"""Delivery of store events to plugins, journaled in ``event_wal``.

Every event is journaled as ``pending`` before any plugin sees it. A
plugin that raises leaves the row ``failed`` with its error and a retry
count; :meth:`EventBus.drain` delivers such rows again until they
complete or reach ``dead_letter``. :meth:`EventBus.close` drains once
before releasing the worker pool, so each CLI run retries whatever the
runs before it could not deliver.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field
from sqlalchemy import insert, select, update

from storectl.infrastructure.database.schema import event_wal
from storectl.plugins.hookspecs import StoreEvent
from storectl.services._helpers import now_iso

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from storectl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

_DELIVERY_TIMEOUT = 30


class EventStatus(StrEnum):
    """Lifecycle of an ``event_wal`` row."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    DEAD_LETTER = "dead_letter"


class DrainReport(BaseModel):
    """Event ids grouped by the status a drain left them in."""

    model_config = {"frozen": True}

    completed: list[int] = Field(default_factory=list)
    failed: list[int] = Field(default_factory=list)
    dead_letter: list[int] = Field(default_factory=list)

    @property
    def retried(self) -> int:
        return len(self.completed) + len(self.failed) + len(self.dead_letter)


class EventBus:
    """Journal store events and hand them to the loaded plugins.

    With *sync* each event is delivered before :meth:`dispatch` returns;
    otherwise delivery runs on a small thread pool and :meth:`close`
    waits for it.
    """

    def __init__(
        self,
        engine: Engine,
        plugins: PluginManager,
        *,
        sync: bool = False,
        max_retries: int = 3,
        max_workers: int = 2,
    ) -> None:
        self._engine = engine
        self._plugins = plugins
        self._max_retries = max_retries
        self._pool = None if sync else ThreadPoolExecutor(max_workers=max_workers)
        self._inflight: list[Future[EventStatus]] = []

    def dispatch(self, event: StoreEvent | str, payload: dict[str, Any]) -> int:
        """Journal *event* and deliver it. Returns the ``event_wal`` row id.

        Raises ValueError when *event* is not a :class:`StoreEvent` name.
        """
        event = StoreEvent(event)
        event_id = self._journal(event, payload)
        if self._pool is None:
            self._deliver(event_id, event, payload)
        else:
            self._inflight.append(self._pool.submit(self._deliver, event_id, event, payload))
        return event_id

    def drain(self) -> DrainReport:
        """Deliver every pending or failed event again, oldest first."""
        self._settle()

        with self._engine.connect() as conn:
            rows = conn.execute(
                select(event_wal.c.id, event_wal.c.hook_name, event_wal.c.payload)
                .where(event_wal.c.status.in_([EventStatus.PENDING, EventStatus.FAILED]))
                .order_by(event_wal.c.id)
            ).fetchall()

        outcome: dict[EventStatus, list[int]] = {
            EventStatus.COMPLETED: [],
            EventStatus.FAILED: [],
            EventStatus.DEAD_LETTER: [],
        }
        for row in rows:
            status = self._deliver(row.id, StoreEvent(row.hook_name), json.loads(row.payload))
            outcome[status].append(row.id)

        return DrainReport(
            completed=outcome[EventStatus.COMPLETED],
            failed=outcome[EventStatus.FAILED],
            dead_letter=outcome[EventStatus.DEAD_LETTER],
        )

    def close(self) -> DrainReport:
        """Finish in-flight deliveries, retry failures once, release the pool."""
        report = self.drain()
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None
        return report

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _journal(self, event: StoreEvent, payload: dict[str, Any]) -> int:
        with self._engine.begin() as conn:
            result = conn.execute(
                insert(event_wal).values(
                    hook_name=str(event),
                    payload=json.dumps(payload),
                    status=EventStatus.PENDING,
                    retries=0,
                    created=now_iso(),
                )
            )
            assert result.lastrowid is not None
            return result.lastrowid

    def _deliver(self, event_id: int, event: StoreEvent, payload: dict[str, Any]) -> EventStatus:
        relay = getattr(self._plugins.hook, event)
        try:
            relay(**payload)
        except Exception as exc:
            logger.debug("Plugin failed on %s #%d: %s", event, event_id, exc)
            return self._record_failure(event_id, str(exc))

        with self._engine.begin() as conn:
            conn.execute(
                update(event_wal)
                .where(event_wal.c.id == event_id)
                .values(status=EventStatus.COMPLETED, completed=now_iso())
            )
        return EventStatus.COMPLETED

    def _record_failure(self, event_id: int, error: str) -> EventStatus:
        current = select(event_wal.c.retries).where(event_wal.c.id == event_id)
        with self._engine.begin() as conn:
            retries = conn.execute(current).scalar_one() + 1
            status = (
                EventStatus.DEAD_LETTER if retries >= self._max_retries else EventStatus.FAILED
            )
            conn.execute(
                update(event_wal)
                .where(event_wal.c.id == event_id)
                .values(
                    status=status,
                    error=error,
                    retries=retries,
                    completed=now_iso() if status is EventStatus.DEAD_LETTER else None,
                )
            )
        return status

    def _settle(self) -> None:
        for future in self._inflight:
            try:
                future.result(timeout=_DELIVERY_TIMEOUT)
            except Exception:
                logger.warning("Background event delivery did not finish", exc_info=True)
        self._inflight.clear()
