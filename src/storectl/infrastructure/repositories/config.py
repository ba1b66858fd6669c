"""Read-oriented repository for the store's key/value configuration."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.engine import Engine

from storectl.infrastructure.database.schema import config

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def parse_flag(raw: str) -> bool:
    """Interpret a stored config string as a boolean.

    Only the explicit "on" spellings enable a flag; any other stored
    value, including numbers other than 1, turns it off.

    Examples:
        >>> parse_flag("1")
        True
        >>> parse_flag("off")
        False
        >>> parse_flag("2")
        False
    """
    return raw.strip().lower() in _TRUE_VALUES


class ConfigRepository:
    """Encapsulates SQL for config reads. Writes go through a store transaction."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def read(self, name: str, default: str | None = None) -> str | None:
        """Return the stored value for *name*, or *default* if unset."""
        stmt = select(config.c.value).where(config.c.name == name)
        with self._engine.connect() as conn:
            value = conn.execute(stmt).scalar_one_or_none()
        return default if value is None else str(value)

    def read_flag(self, name: str, default: bool = True) -> bool:
        """Read *name* as a boolean flag; *default* applies only when the row is absent."""
        raw = self.read(name)
        if raw is None:
            return default
        return parse_flag(raw)

    def read_many(self, names: list[str]) -> dict[str, str]:
        """Return stored values for the given names (missing names are omitted)."""
        if not names:
            return {}
        stmt = select(config.c.name, config.c.value).where(config.c.name.in_(names))
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return {str(row.name): str(row.value) for row in rows}

    def list_all(self, *, include_hidden: bool = True) -> dict[str, str]:
        stmt = select(config.c.name, config.c.value).order_by(config.c.name)
        if not include_hidden:
            stmt = stmt.where(config.c.hidden == 0)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return {str(row.name): str(row.value) for row in rows}
