"""Extraction service with default adapters.

Where: src/tagprobe/application/services/extract_service.py
What: Wire MetadataAssembler to the mutagen demuxer and decoder registry.
Why: Hosts call one function per file without assembling the pipeline themselves.
"""

from __future__ import annotations

from pathlib import Path

from tagprobe.features.metadata.adapters import MutagenDemuxer, default_decoders
from tagprobe.features.metadata.domain import MetadataResult
from tagprobe.features.metadata.usecases import (
    DecoderRegistryPort,
    DemuxerPort,
    MetadataAssembler,
)

__all__ = ["build_assembler", "extract_metadata", "extract_metadata_from_path"]


def build_assembler(
    demuxer: DemuxerPort | None = None,
    decoders: DecoderRegistryPort | None = None,
) -> MetadataAssembler:
    """Create an assembler, filling in the default adapters."""

    return MetadataAssembler(
        demuxer=demuxer if demuxer is not None else MutagenDemuxer(),
        decoders=decoders if decoders is not None else default_decoders(),
    )


def extract_metadata(
    fd: int,
    *,
    demuxer: DemuxerPort | None = None,
    decoders: DecoderRegistryPort | None = None,
) -> MetadataResult:
    """Extract metadata from the file behind an open descriptor.

    The descriptor stays open; the caller remains responsible for closing it.
    """

    return build_assembler(demuxer, decoders).extract(fd)


def extract_metadata_from_path(
    path: Path | str,
    *,
    demuxer: DemuxerPort | None = None,
    decoders: DecoderRegistryPort | None = None,
) -> MetadataResult:
    """Extract metadata from a path, skipping descriptor resolution."""

    return build_assembler(demuxer, decoders).extract_path(Path(path))
