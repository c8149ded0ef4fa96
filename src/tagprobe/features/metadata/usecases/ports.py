"""Demuxer and decoder ports.

Where: src/tagprobe/features/metadata/usecases/ports.py
What: Describe the container, stream and decoder collaborators as Protocols.
Why: Keep use cases independent of mutagen so tests and other backends can stand in.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Protocol, TypeAlias, runtime_checkable

from ..domain.models import MediaType

TagEntry: TypeAlias = tuple[str, str]


@runtime_checkable
class StreamHandle(Protocol):
    """Port for one stream of an opened container."""

    @property
    def index(self) -> int:
        """Position of the stream inside the container."""
        ...

    @property
    def media_type(self) -> MediaType:
        """Classification of the stream payload."""
        ...

    @property
    def codec_id(self) -> str | None:
        """Identifier used to look up a decoder."""
        ...

    @property
    def sample_rate(self) -> int:
        """Sample rate in Hz; 0 when not applicable."""
        ...

    @property
    def channels(self) -> int:
        """Channel count; 0 when not applicable."""
        ...

    def tags(self) -> Iterator[TagEntry]:
        """Iterate stream-scope tag entries in dictionary order."""
        ...


@runtime_checkable
class ContainerHandle(Protocol):
    """Port for an opened container, valid until ``close`` is called."""

    @property
    def streams(self) -> Sequence[StreamHandle]:
        """Streams in index order; populated by ``find_stream_info``."""
        ...

    @property
    def bit_rate(self) -> int:
        """Container bitrate in bits per second, or the backend's unknown value."""
        ...

    @property
    def duration(self) -> int:
        """Duration in the backend's native time base."""
        ...

    def find_stream_info(self) -> None:
        """Probe codec parameters for every stream.

        Raises:
            StreamInfoError: If stream information cannot be read.
        """
        ...

    def tags(self) -> Iterator[TagEntry]:
        """Iterate container-scope tag entries in dictionary order."""
        ...

    def close(self) -> None:
        """Release the handle. Calling it again is a no-op."""
        ...


@runtime_checkable
class DemuxerPort(Protocol):
    """Port for the container parsing backend."""

    def open(self, path: Path) -> ContainerHandle:
        """Open and parse container headers at ``path``.

        Raises:
            ContainerOpenError: If the input cannot be opened or recognized.
        """
        ...


@runtime_checkable
class DecoderRegistryPort(Protocol):
    """Port for resolving codec identifiers to decoder descriptions."""

    def find_decoder(self, codec_id: str | None) -> str | None:
        """Return the decoder long name, or None when none is registered."""
        ...


__all__ = [
    "ContainerHandle",
    "DecoderRegistryPort",
    "DemuxerPort",
    "StreamHandle",
    "TagEntry",
]
