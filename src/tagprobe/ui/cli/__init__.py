"""Command line host for tagprobe.

Where: src/tagprobe/ui/cli/__init__.py
What: Expose the CLI entry point.
Why: Back the tagprobe console script.
"""

from .cli import main

__all__ = ["main"]
