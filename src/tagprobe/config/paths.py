"""Configuration file location.

Where: src/tagprobe/config/paths.py
What: Decide which TOML file a run reads.
Why: Keep the lookup order (explicit path, TAGPROBE_CONFIG, project default) in one place.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

ENV_CONFIG_PATH: Final[str] = "TAGPROBE_CONFIG"

_PROJECT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")


def project_root(start: Path | None = None) -> Path:
    """Return the nearest ancestor of ``start`` holding a project marker.

    Falls back to the working directory for installs outside a checkout.
    """
    origin = start or Path(__file__).resolve().parent
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).exists() for marker in _PROJECT_MARKERS):
            return candidate
    return Path.cwd()


def default_config_path() -> Path:
    return project_root() / "config" / "config.toml"


def config_path(
    explicit_path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> Path:
    """Resolve the config file for this run.

    Args:
        explicit_path: Path given on the command line; wins when set.
        env: Environment mapping used instead of ``os.environ``.

    Returns:
        Path: Absolute location; the file itself may not exist.
    """
    if explicit_path is not None:
        chosen = Path(explicit_path)
    else:
        override = (env if env is not None else os.environ).get(ENV_CONFIG_PATH, "").strip()
        chosen = Path(override) if override else default_config_path()
    return chosen.expanduser().resolve()


__all__ = [
    "ENV_CONFIG_PATH",
    "config_path",
    "default_config_path",
    "project_root",
]
