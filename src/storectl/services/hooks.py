"""HookService — hook record CRUD and activation toggles.

Every mutation reports ``post_hook_change``. Mutations listed in
:data:`storectl.domain.hooks.CACHE_CLEARING_ACTIONS` also dispatch
``post_cache_clear`` for the configured cache directory.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection, RowMapping
from sqlalchemy.exc import IntegrityError

from storectl.domain.hooks import CACHE_CLEARING_ACTIONS, HookAction, HookFields, HookType
from storectl.infrastructure.database.schema import hooks
from storectl.plugins.hookspecs import StoreEvent
from storectl.services._helpers import now_iso
from storectl.services.base import BaseService
from storectl.services.result import ServiceResult, fail

logger = logging.getLogger(__name__)

_BOOL_COLUMNS = ("native", "active", "block", "by_module")


class HookService(BaseService):
    """Manages hook records."""

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(
        self,
        code: str,
        hook_type: HookType = HookType.FRONT,
        *,
        locale: str | None = None,
        native: bool = False,
        active: bool = True,
        title: str = "",
    ) -> ServiceResult:
        """Create a hook from its identifying fields only."""
        op = "hook_create"
        try:
            fields = HookFields(
                code=code,
                type=hook_type,
                locale=locale or self._store.settings.store.locale,
                native=native,
                active=active,
                title=title,
            )
        except ValueError as exc:
            return fail(op, "VALIDATION_FAILED", str(exc))
        return self._insert(op, HookAction.CREATE, fields)

    def create_all(self, fields: HookFields) -> ServiceResult:
        """Create a hook with every attribute set. Does not clear caches."""
        return self._insert("hook_create_all", HookAction.CREATE_ALL, fields)

    def update(self, hook_id: int, fields: HookFields) -> ServiceResult:
        op = "hook_update"
        values = _column_values(fields)
        try:
            with self._store.transaction() as txn:
                if _fetch(txn.conn, hook_id) is None:
                    return _not_found(op, hook_id)
                txn.conn.execute(
                    update(hooks).where(hooks.c.id == hook_id).values(**values, modified=now_iso())
                )
                row = _fetch(txn.conn, hook_id)
        except IntegrityError:
            return _duplicate(op, fields)
        assert row is not None
        return self._respond(op, HookAction.UPDATE, row)

    def delete(self, hook_id: int) -> ServiceResult:
        op = "hook_delete"
        with self._store.transaction() as txn:
            row = _fetch(txn.conn, hook_id)
            if row is None:
                return _not_found(op, hook_id)
            txn.conn.execute(delete(hooks).where(hooks.c.id == hook_id))
        return self._respond(op, HookAction.DELETE, row)

    def deactivate(self, hook_id: int) -> ServiceResult:
        """Force a hook inactive. Does not clear caches."""
        return self._set_flag("hook_deactivate", HookAction.DEACTIVATE, hook_id, "active", False)

    def toggle_native(self, hook_id: int) -> ServiceResult:
        return self._set_flag("hook_toggle_native", HookAction.TOGGLE_NATIVE, hook_id, "native")

    def toggle_activation(self, hook_id: int) -> ServiceResult:
        return self._set_flag(
            "hook_toggle_activation", HookAction.TOGGLE_ACTIVATION, hook_id, "active"
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, hook_id: int) -> ServiceResult:
        op = "hook_get"
        with self._store.engine.connect() as conn:
            row = _fetch(conn, hook_id)
        if row is None:
            return _not_found(op, hook_id)
        return ServiceResult(ok=True, op=op, data=_to_data(row))

    def list_hooks(
        self,
        *,
        hook_type: HookType | None = None,
        active: bool | None = None,
    ) -> ServiceResult:
        stmt = select(hooks).order_by(hooks.c.type, hooks.c.code)
        if hook_type is not None:
            stmt = stmt.where(hooks.c.type == int(hook_type))
        if active is not None:
            stmt = stmt.where(hooks.c.active == int(active))
        with self._store.engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        items = [_to_data(row) for row in rows]
        return ServiceResult(ok=True, op="hook_list", data={"count": len(items), "items": items})

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _insert(self, op: str, action: HookAction, fields: HookFields) -> ServiceResult:
        now = now_iso()
        try:
            with self._store.transaction() as txn:
                result = txn.conn.execute(
                    insert(hooks).values(**_column_values(fields), created=now, modified=now)
                )
                row = _fetch(txn.conn, result.inserted_primary_key[0])
        except IntegrityError:
            return _duplicate(op, fields)
        assert row is not None
        return self._respond(op, action, row)

    def _set_flag(
        self,
        op: str,
        action: HookAction,
        hook_id: int,
        column: str,
        value: bool | None = None,
    ) -> ServiceResult:
        """Set *column* to *value*, or flip it when *value* is None."""
        with self._store.transaction() as txn:
            row = _fetch(txn.conn, hook_id)
            if row is None:
                return _not_found(op, hook_id)
            new_value = (not bool(row[column])) if value is None else value
            txn.conn.execute(
                update(hooks)
                .where(hooks.c.id == hook_id)
                .values({column: int(new_value), "modified": now_iso()})
            )
            row = _fetch(txn.conn, hook_id)
        assert row is not None
        return self._respond(op, action, row)

    def _respond(self, op: str, action: HookAction, row: RowMapping) -> ServiceResult:
        warnings: list[str] = []
        data = _to_data(row)
        logger.debug("Hook %s %s (%s)", data["id"], action, data["code"])

        self._dispatch_event(
            StoreEvent.HOOK_CHANGE,
            {"action": str(action), "hook_id": data["id"], "code": data["code"]},
            warnings,
        )
        cache_cleared = action in CACHE_CLEARING_ACTIONS
        if cache_cleared:
            self._dispatch_event(
                StoreEvent.CACHE_CLEAR,
                {"cache_dir": str(self._store.settings.cache_dir), "reason": f"hook {action}"},
                warnings,
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={**data, "cache_cleared": cache_cleared},
            warnings=warnings,
        )


def _fetch(conn: Connection, hook_id: int) -> RowMapping | None:
    return conn.execute(select(hooks).where(hooks.c.id == hook_id)).mappings().first()


def _column_values(fields: HookFields) -> dict[str, Any]:
    values = fields.model_dump()
    values["type"] = int(fields.type)
    for column in _BOOL_COLUMNS:
        values[column] = int(values[column])
    return values


def _to_data(row: RowMapping) -> dict[str, Any]:
    data = dict(row)
    for column in _BOOL_COLUMNS:
        data[column] = bool(data[column])
    data["type"] = HookType(data["type"]).name.lower()
    return data


def _not_found(op: str, hook_id: int) -> ServiceResult:
    return fail(op, "NOT_FOUND", f"No hook found with ID: {hook_id}", hook_id=hook_id)


def _duplicate(op: str, fields: HookFields) -> ServiceResult:
    return fail(
        op,
        "DUPLICATE_CODE",
        f"A {fields.type.name.lower()} hook with code {fields.code!r} already exists",
        code=fields.code,
        type=fields.type.name.lower(),
    )
