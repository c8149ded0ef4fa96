"""Domain types for metadata extraction.

Where: src/tagprobe/features/metadata/domain/__init__.py
What: Re-export result models and the error hierarchy.
Why: Provide one import path for models and errors.
"""

from .errors import ContainerOpenError, MetadataError, PathResolutionError, StreamInfoError
from .models import (
    CanonicalField,
    CanonicalFields,
    ContainerInfo,
    ExtractionStatus,
    MediaType,
    MetadataResult,
    StreamInfo,
    TagScope,
    media_type_name,
)

__all__ = [
    "CanonicalField",
    "CanonicalFields",
    "ContainerInfo",
    "ContainerOpenError",
    "ExtractionStatus",
    "MediaType",
    "MetadataError",
    "MetadataResult",
    "PathResolutionError",
    "StreamInfo",
    "StreamInfoError",
    "TagScope",
    "media_type_name",
]
