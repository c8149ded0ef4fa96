"""Configuration loading for the command line host.

Where: src/tagprobe/config/__init__.py
What: Re-export the Config dataclass and config file lookup.
Why: The CLI needs one import for both.
"""

from .config import Config
from .paths import ENV_CONFIG_PATH, config_path, default_config_path

__all__ = ["Config", "ENV_CONFIG_PATH", "config_path", "default_config_path"]
