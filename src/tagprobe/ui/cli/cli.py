"""Command line interface for tagprobe.

Where: src/tagprobe/ui/cli/cli.py
What: Open each file, extract through its descriptor and render the results.
Why: Exercise the descriptor contract the way embedding hosts do.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from tagprobe.application.services import extract_metadata
from tagprobe.config import Config
from tagprobe.features.metadata import ExtractionStatus, MetadataResult
from tagprobe.platform.logging import logger, setup_logger

from .args import CLIArgs, parse_args
from .display import ResultDisplay

__all__ = ["extract_file", "main"]


def extract_file(path: Path) -> MetadataResult:
    """Open ``path`` read-only and extract through its descriptor."""

    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError as exc:
        logger.error("Cannot open %s: %s", path, exc.strerror or exc)
        return MetadataResult.failure(ExtractionStatus.OPEN_ERROR)
    try:
        return extract_metadata(fd)
    finally:
        os.close(fd)


def _configure(args: CLIArgs) -> Config:
    config = Config.load(args.config)
    level = args.log_level or config.log_level
    _ = setup_logger(log_file=config.log_file, console_level=logging.getLevelName(level))
    return config


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Returns:
        int: 0 when every file was read successfully, 1 if any failed, 2 on
        configuration errors.
    """
    args = parse_args(argv)
    try:
        config = _configure(args)
    except (OSError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    results = [(path, extract_file(path)) for path in args.files]

    display = ResultDisplay()
    if args.json or config.output_format == "json":
        display.show_json(results)
    else:
        display.show_tables(results)

    return 0 if all(result.ok for _, result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
