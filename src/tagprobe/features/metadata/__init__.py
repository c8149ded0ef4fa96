"""Metadata extraction feature.

Where: src/tagprobe/features/metadata/__init__.py
What: Expose the extraction pipeline, its ports and result types.
Why: Provide a cohesive import surface for services and host integrations.
"""

from .domain import (
    CanonicalField,
    CanonicalFields,
    ContainerInfo,
    ContainerOpenError,
    ExtractionStatus,
    MediaType,
    MetadataError,
    MetadataResult,
    PathResolutionError,
    StreamInfo,
    StreamInfoError,
    TagScope,
)
from .usecases import (
    ContainerHandle,
    DecoderRegistryPort,
    DemuxerPort,
    MetadataAssembler,
    StreamHandle,
)

__all__ = [
    "CanonicalField",
    "CanonicalFields",
    "ContainerHandle",
    "ContainerInfo",
    "ContainerOpenError",
    "DecoderRegistryPort",
    "DemuxerPort",
    "ExtractionStatus",
    "MediaType",
    "MetadataAssembler",
    "MetadataError",
    "MetadataResult",
    "PathResolutionError",
    "StreamHandle",
    "StreamInfo",
    "StreamInfoError",
    "TagScope",
]
