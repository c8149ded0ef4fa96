"""Metadata extraction errors.

Where: src/tagprobe/features/metadata/domain/errors.py
What: Define the exception hierarchy, each class naming the status it maps to.
Why: Let each stage raise where it fails while the assembler maps to one status.
"""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from .models import ExtractionStatus


class MetadataError(Exception):
    """Base exception for extraction failures."""

    status: ClassVar[ExtractionStatus]


class PathResolutionError(MetadataError):
    """Raised when a descriptor cannot be mapped to a filesystem path."""

    status: ClassVar[ExtractionStatus] = ExtractionStatus.PATH_RESOLUTION_ERROR

    def __init__(self, fd: int, reason: str) -> None:
        self.fd: int = fd
        self.reason: str = reason
        super().__init__(f"Cannot resolve descriptor {fd}: {reason}")


class ContainerOpenError(MetadataError):
    """Raised when the container at a path cannot be opened or recognized."""

    status: ClassVar[ExtractionStatus] = ExtractionStatus.OPEN_ERROR

    def __init__(self, path: Path, reason: str) -> None:
        self.path: Path = path
        self.reason: str = reason
        super().__init__(f"Cannot open {path}: {reason}")


class StreamInfoError(MetadataError):
    """Raised when an opened container yields no usable stream information."""

    status: ClassVar[ExtractionStatus] = ExtractionStatus.STREAM_INFO_ERROR

    def __init__(self, path: Path, reason: str) -> None:
        self.path: Path = path
        self.reason: str = reason
        super().__init__(f"Cannot read stream info from {path}: {reason}")


__all__ = [
    "ContainerOpenError",
    "MetadataError",
    "PathResolutionError",
    "StreamInfoError",
]
