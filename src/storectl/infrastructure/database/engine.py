"""SQLite engine for a store: ``{store_root}/.storectl/storectl.db``.

Every connection runs in WAL mode with foreign keys enforced, so readers
never block the single CLI writer and ``ON DELETE CASCADE`` holds.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from storectl.infrastructure.database.schema import metadata

STATE_DIRNAME = ".storectl"
DB_FILENAME = "storectl.db"
STATE_SUBDIRS = ("backups", "plugins")

_CONNECT_PRAGMAS = ("PRAGMA journal_mode=WAL", "PRAGMA foreign_keys=ON")


def db_path_for(store_root: Path) -> Path:
    return store_root / STATE_DIRNAME / DB_FILENAME


def _apply_pragmas(dbapi_conn: Any, _record: Any) -> None:
    cursor = dbapi_conn.cursor()
    for pragma in _CONNECT_PRAGMAS:
        cursor.execute(pragma)
    cursor.close()


def create_db_engine(db_path: Path) -> Engine:
    engine = create_engine(f"sqlite:///{db_path}")
    event.listen(engine, "connect", _apply_pragmas)
    return engine


def init_database(store_root: Path) -> Engine:
    """Create ``.storectl/`` and any missing tables; return the engine.

    Safe on an existing store: present tables are left alone.
    """
    state_dir = store_root / STATE_DIRNAME
    for sub in STATE_SUBDIRS:
        (state_dir / sub).mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(db_path_for(store_root))
    metadata.create_all(engine)
    return engine
