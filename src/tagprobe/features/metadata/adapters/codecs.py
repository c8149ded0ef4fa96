"""Decoder registry.

Where: src/tagprobe/features/metadata/adapters/codecs.py
What: Map codec identifiers to decoder long names through a read-only table.
Why: Report a human readable codec for the selected stream without mutable globals.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final, final

__all__ = ["DECODER_LONG_NAMES", "DecoderRegistry", "default_decoders"]

DECODER_LONG_NAMES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "mp1": "MP1 (MPEG audio layer 1)",
        "mp2": "MP2 (MPEG audio layer 2)",
        "mp3": "MP3 (MPEG audio layer 3)",
        "aac": "AAC (Advanced Audio Coding)",
        "alac": "ALAC (Apple Lossless Audio Codec)",
        "ac3": "ATSC A/52A (AC-3)",
        "eac3": "ATSC A/52B (AC-3, E-AC-3)",
        "flac": "FLAC (Free Lossless Audio Codec)",
        "vorbis": "Vorbis",
        "opus": "Opus",
        "speex": "Speex",
        "theora": "Theora",
        "wavpack": "WavPack",
        "ape": "Monkey's Audio",
        "tta": "TTA (True Audio)",
        "musepack7": "Musepack SV7",
        "musepack8": "Musepack SV8",
        "wmav2": "Windows Media Audio 2",
        "pcm_u8": "PCM unsigned 8-bit",
        "pcm_s16le": "PCM signed 16-bit little-endian",
        "pcm_s24le": "PCM signed 24-bit little-endian",
        "pcm_s32le": "PCM signed 32-bit little-endian",
        "pcm_s8": "PCM signed 8-bit",
        "pcm_s16be": "PCM signed 16-bit big-endian",
        "pcm_s24be": "PCM signed 24-bit big-endian",
        "pcm_s32be": "PCM signed 32-bit big-endian",
        "dsd_lsbf_planar": "DSD (Direct Stream Digital), least significant bit first, planar",
        "dsd_msbf": "DSD (Direct Stream Digital), most significant bit first",
    }
)


@final
class DecoderRegistry:
    """Look up decoder descriptions by codec id."""

    def __init__(self, names: Mapping[str, str] = DECODER_LONG_NAMES) -> None:
        self._names: Mapping[str, str] = MappingProxyType(dict(names))

    def find_decoder(self, codec_id: str | None) -> str | None:
        if codec_id is None:
            return None
        return self._names.get(codec_id)

    def __contains__(self, codec_id: object) -> bool:
        return codec_id in self._names


def default_decoders() -> DecoderRegistry:
    return DecoderRegistry()
