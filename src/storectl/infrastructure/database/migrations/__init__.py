"""Schema revisions for the store database, applied with Alembic.

There is no ``alembic.ini``: :func:`build_config` points Alembic at the
revision scripts beside this module and hands ``env.py`` the database
path through ``Config.attributes``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from storectl.infrastructure.database.engine import db_path_for

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

SCRIPT_LOCATION = Path(__file__).parent


def build_config(db_path: Path) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    cfg.attributes["db_path"] = db_path
    return cfg


def head_revision() -> str | None:
    return ScriptDirectory(str(SCRIPT_LOCATION)).get_current_head()


def current_revision(engine: Engine) -> str | None:
    """Revision recorded in ``alembic_version``, or None for an unstamped database."""
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def pending_revisions(current: str | None) -> list[tuple[str, str]]:
    """``(revision, description)`` pairs newer than *current*, newest first.

    Revisions form a single line, so this follows ``down_revision`` from
    head until it reaches *current*.
    """
    script = ScriptDirectory(str(SCRIPT_LOCATION))
    pending: list[tuple[str, str]] = []
    revision = script.get_current_head()
    while revision is not None and revision != current:
        script_rev = script.get_revision(revision)
        if script_rev is None:
            break
        pending.append((script_rev.revision, script_rev.doc or ""))
        down = script_rev.down_revision
        revision = down if isinstance(down, str) or down is None else down[0]
    return pending


def stamp_head(store_root: Path) -> None:
    """Record a freshly created database as already at head."""
    command.stamp(build_config(db_path_for(store_root)), "head")
