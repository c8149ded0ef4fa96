"""Metadata extraction use cases.

Where: src/tagprobe/features/metadata/usecases/__init__.py
What: Re-export the assembler, probe, selector, normalizer and ports.
Why: Provide a stable import path for services and tests.
"""

from .assembler import MetadataAssembler
from .container_probe import open_container
from .ports import ContainerHandle, DecoderRegistryPort, DemuxerPort, StreamHandle, TagEntry
from .stream_selector import describe_stream, select_audio_stream
from .tag_normalizer import (
    CANONICAL_KEYS,
    TagAccumulator,
    TagNormalization,
    classify_key,
    format_extra,
    normalize_tags,
)

__all__ = [
    "CANONICAL_KEYS",
    "ContainerHandle",
    "DecoderRegistryPort",
    "DemuxerPort",
    "MetadataAssembler",
    "StreamHandle",
    "TagAccumulator",
    "TagEntry",
    "TagNormalization",
    "classify_key",
    "describe_stream",
    "format_extra",
    "normalize_tags",
    "open_container",
    "select_audio_stream",
]
