"""InitService — create a new store directory.

Pipeline: CHECK → WRITE CONFIG → CREATE DATABASE → STAMP

Runs before any Store exists, so it is exposed as a static method rather
than through :class:`BaseService`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from storectl.config.discovery import CONFIG_FILENAME
from storectl.infrastructure.database.engine import db_path_for, init_database
from storectl.infrastructure.database.migrations import stamp_head
from storectl.services.result import ServiceResult, fail

logger = logging.getLogger(__name__)

_CONFIG_TEMPLATE = """\
[store]
name = "{name}"
locale = "{locale}"

[cart]
verify_stock = {verify_stock}

[cache]
dir = ".storectl/cache"
"""


class InitService:
    """Creates the config file and database for a new store."""

    @staticmethod
    def init_store(
        path: Path,
        *,
        name: str,
        locale: str = "en_US",
        verify_stock: bool = True,
    ) -> ServiceResult:
        op = "init_store"
        config_file = path / CONFIG_FILENAME
        if config_file.exists():
            return fail(
                op,
                "ALREADY_INITIALIZED",
                f"A store already exists at {path}",
                path=str(config_file),
            )
        if '"' in name or '"' in locale:
            return fail(op, "INVALID_NAME", "Store name and locale must not contain quotes")

        path.mkdir(parents=True, exist_ok=True)
        config_file.write_text(
            _CONFIG_TEMPLATE.format(
                name=name,
                locale=locale,
                verify_stock="true" if verify_stock else "false",
            ),
            encoding="utf-8",
        )

        engine = init_database(path)
        engine.dispose()
        stamp_head(path)
        logger.debug("Initialized store %s at %s", name, path)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "store_path": str(path),
                "name": name,
                "locale": locale,
                "verify_stock": verify_stock,
                "config_path": str(config_file),
                "db_path": str(db_path_for(path)),
            },
        )
