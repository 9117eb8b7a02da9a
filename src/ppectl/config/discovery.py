"""Locate ``ppectl.toml``.

``PPECTL_CONFIG`` pins the file outright; otherwise the nearest
``ppectl.toml`` at or above the starting directory wins. Parsing is
left to :class:`~ppectl.config.settings.TomlSettingsSource`.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "ppectl.toml"
CONFIG_ENV_VAR = "PPECTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), if any.

    A ``PPECTL_CONFIG`` path that does not exist disables the walk-up
    rather than falling back to a file the user did not name.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
