"""Built-in cache plugin — empties the rendered-template cache directory.

Listens for ``post_cache_clear``. The directory itself is kept; only its
contents are removed. Paths outside the store root are refused.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from storectl.plugins.hookspecs import hookimpl

logger = logging.getLogger(__name__)


class CachePlugin:
    """Clears cache directories on request."""

    def __init__(self, store_root: Path | None = None) -> None:
        self._store_root = store_root.resolve() if store_root is not None else None
        self.cleared: list[str] = []

    @hookimpl
    def post_cache_clear(self, cache_dir: str, reason: str) -> None:
        target = Path(cache_dir).resolve()
        if self._store_root is not None and not target.is_relative_to(self._store_root):
            logger.warning("Refusing to clear cache outside store root: %s", target)
            return
        if not target.is_dir():
            return

        removed = 0
        for entry in target.iterdir():
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink(missing_ok=True)
            removed += 1

        self.cleared.append(str(target))
        logger.debug("Cleared %d cache entries in %s (%s)", removed, target, reason)
