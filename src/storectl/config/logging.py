"""Route storectl's stdlib logging through structlog.

Modules log with ``logging.getLogger(__name__)``; everything ends up on
stderr, as console lines or (``--log-json``) one JSON object per line.
Once a store is open, :func:`bind_store` adds its root and name to every
record.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

# Libraries whose DEBUG output is noise even under --verbose.
_QUIET_LOGGERS = ("alembic", "sqlalchemy", "pluggy")


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler; safe to call more than once.

    storectl loggers emit DEBUG with *verbose* and WARNING otherwise.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("storectl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_store(root: Path, name: str) -> None:
    """Tag subsequent log records with the open store."""
    structlog.contextvars.bind_contextvars(store_root=str(root), store=name)


def unbind_store() -> None:
    structlog.contextvars.unbind_contextvars("store_root", "store")
