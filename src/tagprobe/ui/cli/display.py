"""Result rendering.

Where: src/tagprobe/ui/cli/display.py
What: Render extraction results as Rich tables or JSON.
Why: Keep console formatting out of the command flow.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any, final

from rich.console import Console
from rich.table import Table

from tagprobe.features.metadata import MetadataResult


@final
class ResultDisplay:
    """Handles result display in the CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(soft_wrap=True)

    def show_json(self, results: Sequence[tuple[Path, MetadataResult]]) -> None:
        payload: list[dict[str, Any]] = [
            {"path": str(path), **result.to_dict()} for path, result in results
        ]
        self.console.print_json(data=payload)

    def show_tables(self, results: Sequence[tuple[Path, MetadataResult]]) -> None:
        for path, result in results:
            self.console.print(self._build_table(path, result))

    @staticmethod
    def _build_table(path: Path, result: MetadataResult) -> Table:
        table = Table(title=str(path), show_header=False, title_justify="left")
        table.add_column("Field", style="bold")
        table.add_column("Value")

        table.add_row("status", f"{result.status.name} ({int(result.status)})")
        if not result.ok:
            return table

        for name, value in (
            ("title", result.title),
            ("artist", result.artist),
            ("album", result.album),
            ("genre", result.genre),
            ("codec", result.codec),
            ("codec type", result.codec_type),
            ("sample rate", f"{result.sample_rate} Hz"),
            ("channels", str(result.channels)),
            ("bitrate", f"{result.bitrate} b/s"),
            ("duration", f"{result.duration} us"),
        ):
            table.add_row(name, value if value is not None else "-")
        for extra in result.extras_raw:
            table.add_row("extra", extra)
        return table


__all__ = ["ResultDisplay"]
