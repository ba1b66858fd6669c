"""Locate a store's ``storectl.toml``.

Like git with ``.git/``, the search walks up from the working directory.
``STORECTL_CONFIG`` names a file directly and disables the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "storectl.toml"
CONFIG_ENV_VAR = "STORECTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Nearest ``storectl.toml`` at or above *start* (default: cwd).

    When ``STORECTL_CONFIG`` is set, returns that file, or None if it
    does not exist.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
