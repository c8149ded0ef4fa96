"""Metadata extraction orchestration.

Where: src/tagprobe/features/metadata/usecases/assembler.py
What: Run resolve, probe, stream selection and tag normalization in order.
Why: Give callers a single entry point that always answers with a result record.
"""

from __future__ import annotations

from pathlib import Path
from typing import final

from tagprobe.platform.descriptors import ResolutionFailure, resolve_descriptor_path
from tagprobe.platform.logging import logger

from ..domain.errors import ContainerOpenError, PathResolutionError, StreamInfoError
from ..domain.models import (
    ContainerInfo,
    ExtractionStatus,
    MetadataResult,
    StreamInfo,
    TagScope,
)
from .container_probe import open_container
from .ports import DecoderRegistryPort, DemuxerPort
from .stream_selector import describe_stream, select_audio_stream
from .tag_normalizer import TagAccumulator

__all__ = ["MetadataAssembler"]


@final
class MetadataAssembler:
    """Build a MetadataResult from a descriptor or a path.

    The assembler holds no per-call state, so one instance may serve
    concurrent calls as long as its demuxer does too.
    """

    def __init__(self, demuxer: DemuxerPort, decoders: DecoderRegistryPort) -> None:
        self._demuxer: DemuxerPort = demuxer
        self._decoders: DecoderRegistryPort = decoders

    def extract(self, fd: int) -> MetadataResult:
        """Extract metadata from the file behind an open descriptor.

        Args:
            fd: Open, readable file descriptor. It is not closed.

        Returns:
            MetadataResult: Populated record, or one carrying only a failure status.
        """
        resolution = resolve_descriptor_path(fd)
        if isinstance(resolution, ResolutionFailure):
            error = PathResolutionError(fd, resolution.reason)
            logger.warning("%s", error)
            return MetadataResult.failure(error.status)
        return self.extract_path(resolution.path)

    def extract_path(self, path: Path) -> MetadataResult:
        """Extract metadata from the container at ``path``."""
        try:
            with open_container(path, self._demuxer) as container:
                streams = container.streams
                accumulator = TagAccumulator()
                accumulator.feed(container.tags(), TagScope.CONTAINER)

                stream_info = StreamInfo()
                position = select_audio_stream(streams)
                if position is not None:
                    audio = streams[position]
                    stream_info = describe_stream(audio, self._decoders)
                    accumulator.feed(audio.tags(), TagScope.STREAM)

                result = MetadataResult(
                    status=ExtractionStatus.SUCCESS,
                    fields=accumulator.fields,
                    stream=stream_info,
                    container=ContainerInfo(
                        bitrate=container.bit_rate,
                        duration=container.duration,
                    ),
                    extras_raw=accumulator.extras,
                )
        except (ContainerOpenError, StreamInfoError) as exc:
            logger.warning("%s", exc)
            return MetadataResult.failure(exc.status)

        logger.debug("Extracted metadata from %s: %s", path, result)
        return result
