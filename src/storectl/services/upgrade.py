"""UpgradeService — bring a store's schema up to the latest revision.

Pipeline: CHECK → BACKUP → MIGRATE → REPORT

A store created by ``init`` before a revision existed already has every
table but no ``alembic_version`` row; such a store is stamped rather
than migrated.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from alembic import command
from sqlalchemy import inspect

from storectl.infrastructure.database.engine import STATE_DIRNAME
from storectl.infrastructure.database.migrations import (
    build_config,
    current_revision,
    head_revision,
    pending_revisions,
)
from storectl.services._helpers import now_compact
from storectl.services.base import BaseService
from storectl.services.result import ServiceResult, fail

logger = logging.getLogger(__name__)

BACKUP_KEEP = 10


class UpgradeService(BaseService):
    """Applies pending schema revisions to the store database."""

    def _tables_exist(self) -> bool:
        return "products" in inspect(self._store.engine).get_table_names()

    def check_pending(self) -> ServiceResult:
        """Report the current and head revisions and what lies between."""
        op = "upgrade"
        try:
            current = current_revision(self._store.engine)
            pending = pending_revisions(current)
        except Exception as exc:
            return fail(op, "CHECK_FAILED", f"Failed to check migrations: {exc}")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "pending_count": len(pending),
                "pending": [{"revision": rev, "description": doc} for rev, doc in pending],
                "current": current,
                "head": head_revision(),
            },
        )

    def apply(self) -> ServiceResult:
        op = "upgrade"
        check = self.check_pending()
        if not check.ok:
            return check

        pending_count = check.data["pending_count"]
        head = check.data["head"]
        if pending_count == 0:
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "applied_count": 0,
                    "current": head,
                    "message": "Database is already up to date",
                },
            )

        try:
            backup_path = self._backup()
        except OSError as exc:
            return fail(op, "BACKUP_FAILED", f"Backup failed: {exc}")

        cfg = build_config(self._store.db_path)
        try:
            if check.data["current"] is None and self._tables_exist():
                command.stamp(cfg, "head")
            else:
                command.upgrade(cfg, "head")
        except Exception as exc:
            return fail(
                op,
                "MIGRATION_FAILED",
                f"Migration failed: {exc}. Backup at: {backup_path}",
                backup_path=str(backup_path),
            )

        logger.debug("Applied %d revision(s); backup at %s", pending_count, backup_path)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "applied_count": pending_count,
                "current": head,
                "backup_path": str(backup_path),
            },
        )

    def stamp_current(self) -> ServiceResult:
        """Mark the database as at head without running any revision."""
        op = "upgrade"
        try:
            command.stamp(build_config(self._store.db_path), "head")
        except Exception as exc:
            return fail(op, "STAMP_FAILED", f"Failed to stamp database: {exc}")
        return ServiceResult(ok=True, op=op, data={"stamped": True, "current": head_revision()})

    def _backup(self) -> Path:
        """Copy the database into ``.storectl/backups``, keeping the newest few."""
        backup_dir = self._store.root / STATE_DIRNAME / "backups"
        backup_dir.mkdir(parents=True, exist_ok=True)
        target = backup_dir / f"storectl-{now_compact()}.db"
        shutil.copy2(self._store.db_path, target)

        for stale in sorted(backup_dir.glob("storectl-*.db"))[:-BACKUP_KEEP]:
            stale.unlink()
        return target
