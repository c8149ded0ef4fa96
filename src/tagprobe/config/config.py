"""Configuration for the tagprobe command line host.

Where: src/tagprobe/config/config.py
What: Load and validate the TOML settings the CLI runs with.
Why: Reject bad values early so the CLI can exit with a configuration error.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from tagprobe.config.paths import config_path
from tagprobe.platform.logging import logger


def _path_field(default: Path | None = None) -> Any:
    """Create a dataclass field whose string values are converted to ``Path``."""
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Runtime configuration; every field has a usable default."""

    # Optional rotating log file
    log_file: Path | None = _path_field()

    # Console log level name (DEBUG, INFO, WARNING, ERROR)
    log_level: str = "WARNING"

    # "table" or "json"
    output_format: str = "table"

    OUTPUT_FORMATS: ClassVar[frozenset[str]] = frozenset({"table", "json"})

    def __post_init__(self) -> None:
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)

        for name in ("log_level", "output_format"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {type(value).__name__}")
        if self.log_file is not None and not isinstance(self.log_file, Path):
            raise ValueError(f"log_file must be a string, got {type(self.log_file).__name__}")

        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        if self.output_format not in self.OUTPUT_FORMATS:
            valid = ", ".join(sorted(self.OUTPUT_FORMATS))
            raise ValueError(f"Unsupported output format '{self.output_format}'. Valid options: {valid}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Config:
        """Build a config from parsed TOML, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def load(
        cls,
        path: Path | str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> Config:
        """Load configuration from TOML, falling back to defaults.

        Args:
            path: Explicit config file; overrides ``TAGPROBE_CONFIG``.
            env: Environment mapping used instead of ``os.environ``.

        Returns:
            Config: Loaded configuration. A missing file yields defaults.

        Raises:
            tomllib.TOMLDecodeError: If the file exists but is not valid TOML.
            ValueError: If a value is out of range.
        """
        config_file = config_path(path, env)
        if not config_file.exists():
            logger.debug("No configuration at %s, using defaults", config_file)
            return cls()

        try:
            with open(config_file, "rb") as f:
                config_dict = tomllib.load(f)
        except Exception as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        logger.debug("Configuration loaded from %s", config_file)
        return cls.from_mapping(config_dict)


__all__ = ["Config"]
