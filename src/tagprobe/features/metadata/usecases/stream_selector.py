"""Primary audio stream selection.

Where: src/tagprobe/features/metadata/usecases/stream_selector.py
What: Pick the first audio stream and describe its codec parameters.
Why: Keep selection rules separate from container handling.
"""

from __future__ import annotations

from collections.abc import Sequence

from tagprobe.platform.logging import logger

from ..domain.models import MediaType, StreamInfo, media_type_name
from .ports import DecoderRegistryPort, StreamHandle

__all__ = ["describe_stream", "select_audio_stream"]


def select_audio_stream(streams: Sequence[StreamHandle]) -> int | None:
    """Return the position of the first audio stream, or None if there is none."""
    for position, stream in enumerate(streams):
        if stream.media_type is MediaType.AUDIO:
            return position
    logger.debug("No audio stream among %d stream(s)", len(streams))
    return None


def describe_stream(stream: StreamHandle, decoders: DecoderRegistryPort) -> StreamInfo:
    """Derive the reported stream properties from codec parameters.

    Args:
        stream: Selected stream.
        decoders: Registry used to resolve the codec long name.

    Returns:
        StreamInfo: Sample rate, channels, codec name and media type string.
    """
    codec = decoders.find_decoder(stream.codec_id)
    if codec is None:
        logger.debug("No decoder registered for codec id %r", stream.codec_id)
    return StreamInfo(
        sample_rate=stream.sample_rate,
        channels=stream.channels,
        codec=codec,
        codec_type=media_type_name(stream.media_type),
    )
