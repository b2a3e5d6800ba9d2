"""Locate the ``semmap.toml`` that governs a project directory.

Lookup order:

1. ``SEMMAP_CONFIG`` names the file outright (a missing file means no config).
2. Each directory from *start* upward is checked for ``semmap.toml`` and
   then ``.semmap/semmap.toml``.
3. The walk stops after the first directory holding ``.git``; a config
   above the repository root never applies to it.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "semmap.toml"
CONFIG_ENV_VAR = "SEMMAP_CONFIG"
HIDDEN_CONFIG = Path(".semmap") / CONFIG_FILENAME
REPO_MARKER = ".git"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        explicit = Path(override)
        return explicit if explicit.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        for candidate in (directory / CONFIG_FILENAME, directory / HIDDEN_CONFIG):
            if candidate.is_file():
                return candidate
        if (directory / REPO_MARKER).exists():
            break
    return None
