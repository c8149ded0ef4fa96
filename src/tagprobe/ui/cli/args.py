"""Command line argument parsing.

Where: src/tagprobe/ui/cli/args.py
What: Define the argparse interface and its typed result.
Why: Keep option handling out of the command flow.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

__all__ = ["CLIArgs", "create_parser", "parse_args"]


@dataclass(slots=True, frozen=True)
class CLIArgs:
    """Parsed command line options."""

    files: tuple[Path, ...]
    json: bool
    config: Path | None
    log_level: str | None


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tagprobe",
        description="Print normalized audio metadata for one or more files.",
    )
    _ = parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="Audio files to inspect",
        metavar="FILE",
    )
    _ = parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of a table",
    )
    _ = parser.add_argument(
        "--config",
        type=Path,
        help="Path to a TOML configuration file",
        metavar="PATH",
    )
    _ = parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level (overrides the configuration)",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> CLIArgs:
    namespace = create_parser().parse_args(argv)
    return CLIArgs(
        files=tuple(namespace.files),
        json=bool(namespace.json),
        config=namespace.config,
        log_level=namespace.log_level,
    )
