"""tagprobe public API.

Where: src/tagprobe/__init__.py
What: Re-export the extraction services and result types.
Why: Hosts import one package instead of reaching into feature modules.
"""

from tagprobe.application.services import extract_metadata, extract_metadata_from_path
from tagprobe.features.metadata import (
    CanonicalFields,
    ContainerInfo,
    ExtractionStatus,
    MetadataResult,
    StreamInfo,
)

__version__ = "0.1.0"

__all__ = [
    "CanonicalFields",
    "ContainerInfo",
    "ExtractionStatus",
    "MetadataResult",
    "StreamInfo",
    "extract_metadata",
    "extract_metadata_from_path",
]
