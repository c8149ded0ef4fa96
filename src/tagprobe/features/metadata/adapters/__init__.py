"""Concrete adapters for the metadata feature ports.

Where: src/tagprobe/features/metadata/adapters/__init__.py
What: Re-export the mutagen demuxer and the decoder registry.
Why: Keep mutagen-specific code out of the use case layer.
"""

from .codecs import DECODER_LONG_NAMES, DecoderRegistry, default_decoders
from .mutagen_demuxer import MutagenContainer, MutagenDemuxer, MutagenStream

__all__ = [
    "DECODER_LONG_NAMES",
    "DecoderRegistry",
    "MutagenContainer",
    "MutagenDemuxer",
    "MutagenStream",
    "default_decoders",
]
