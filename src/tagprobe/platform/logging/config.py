"""Logger configuration bootstrap.

Where: src/tagprobe/platform/logging/config.py
What: Attach Rich console output and an optional rotating file to the ``tagprobe`` logger.
Why: Library and CLI share one logger whose handlers the CLI swaps at startup.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME: Final[str] = "tagprobe"

_FILE_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_MAX_LOG_BYTES: Final[int] = 10 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 5


def _console_handler(level: int) -> logging.Handler:
    # stderr keeps stdout free for tables and JSON.
    handler = RichHandler(
        console=Console(stderr=True, soft_wrap=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    return handler


def _file_handler(log_file: Path, level: int) -> logging.Handler:
    target = Path(log_file).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        target,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Replace the handlers of the shared logger.

    Args:
        log_file: Rotating log destination; console only when None.
        console_level: Threshold for the Rich console handler.
        file_level: Threshold for the file handler.

    Returns:
        logging.Logger: The configured ``tagprobe`` logger.
    """
    shared = logging.getLogger(LOGGER_NAME)
    shared.setLevel(logging.DEBUG)
    shared.propagate = False

    for old in list(shared.handlers):
        shared.removeHandler(old)
        old.close()

    shared.addHandler(_console_handler(console_level))
    if log_file is not None:
        shared.addHandler(_file_handler(log_file, file_level))
    return shared


logger: Final[logging.Logger] = setup_logger()


__all__ = ["LOGGER_NAME", "setup_logger", "logger"]
