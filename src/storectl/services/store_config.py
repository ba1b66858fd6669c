"""StoreConfigService — persisted store configuration.

Two surfaces over the same ``config`` table:

- single values (``get`` / ``set``), e.g. ``verifyStock``;
- the store identity form (``save_store`` / ``show_store``), which writes
  every submitted field except form plumbing and leaves an audit entry.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from storectl.domain.store import STORE_LOG_RESOURCE, StoreConfigForm
from storectl.plugins.hookspecs import StoreEvent
from storectl.services._helpers import now_iso
from storectl.services.base import BaseService
from storectl.services.result import ServiceError, ServiceResult, fail

logger = logging.getLogger(__name__)

STORE_FIELDS: tuple[str, ...] = tuple(
    name for name in StoreConfigForm.model_fields if name not in ("success_url", "error_message")
)


class StoreConfigService(BaseService):
    """Reads and writes store configuration values."""

    def get(self, name: str) -> ServiceResult:
        op = "config_get"
        value = self._store.config.read(name)
        if value is None:
            return fail(op, "NOT_FOUND", f"No config value named {name!r}", name=name)
        return ServiceResult(ok=True, op=op, data={"name": name, "value": value})

    def set(
        self,
        name: str,
        value: str,
        *,
        secured: bool | None = None,
        hidden: bool | None = None,
    ) -> ServiceResult:
        op = "config_set"
        name = name.strip()
        if not name:
            return fail(op, "INVALID_NAME", "Config name must not be blank")

        warnings: list[str] = []
        with self._store.transaction() as txn:
            created = txn.write_config(name, value, now_iso(), secured=secured, hidden=hidden)

        self._dispatch_event(StoreEvent.CONFIG_WRITE, {"names": [name]}, warnings)
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name, "value": value, "created": created},
            warnings=warnings,
        )

    def list_values(self, *, include_hidden: bool = True) -> ServiceResult:
        values = self._store.config.list_all(include_hidden=include_hidden)
        return ServiceResult(
            ok=True,
            op="config_list",
            data={"count": len(values), "values": values},
        )

    def save_store(self, submitted: dict[str, Any]) -> ServiceResult:
        """Validate and persist the store identity form.

        ``success_url`` and ``error_message`` are accepted but never written.
        All values are written in one transaction together with the
        ``admin_log`` entry; a validation failure writes nothing.
        """
        op = "save_store"
        try:
            form = StoreConfigForm.model_validate(submitted)
        except ValidationError as exc:
            errors = [
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in exc.errors()
            ]
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="VALIDATION_FAILED",
                    message="Store configuration failed.",
                    detail={"errors": errors},
                ),
            )

        values = form.persisted_values()
        warnings: list[str] = []
        now = now_iso()
        with self._store.transaction() as txn:
            for name, value in values.items():
                txn.write_config(name, value, now, secured=False, hidden=False)
            txn.append_admin_log(STORE_LOG_RESOURCE, "update", "Store configuration changed", now)

        logger.debug("Store configuration saved: %s", sorted(values))
        self._dispatch_event(StoreEvent.CONFIG_WRITE, {"names": sorted(values)}, warnings)

        return ServiceResult(
            ok=True,
            op=op,
            data={"saved": sorted(values), "count": len(values)},
            warnings=warnings,
        )

    def show_store(self) -> ServiceResult:
        stored = self._store.config.read_many(list(STORE_FIELDS))
        data = {name: stored.get(name, "") for name in STORE_FIELDS}
        return ServiceResult(ok=True, op="show_store", data=data)
