"""Alembic entry point: run revisions against the store database.

Only online mode is supported; the database path comes from
``build_config`` via ``Config.attributes``.
"""

from __future__ import annotations

from alembic import context

from storectl.infrastructure.database.engine import create_db_engine
from storectl.infrastructure.database.schema import metadata

if context.is_offline_mode():
    raise RuntimeError("storectl migrations need a live database")

engine = create_db_engine(context.config.attributes["db_path"])
try:
    with engine.connect() as connection:
        # SQLite cannot ALTER most column changes in place.
        context.configure(
            connection=connection,
            target_metadata=metadata,
            render_as_batch=True,
        )
        with context.begin_transaction():
            context.run_migrations()
finally:
    engine.dispose()
