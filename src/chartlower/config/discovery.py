"""Locate ``chartlower.toml``.

``CHARTLOWER_CONFIG`` names a file directly; otherwise the nearest
``chartlower.toml`` in the start directory or any ancestor is used. The
file itself is read by :class:`chartlower.config.settings.TomlSettingsSource`.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "chartlower.toml"
CONFIG_ENV_VAR = "CHARTLOWER_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Path of the config file that applies to *start* (default: cwd), or None.

    An env override pointing at a missing file disables discovery
    instead of falling back to the walk.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
