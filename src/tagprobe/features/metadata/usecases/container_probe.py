"""Container probe lifecycle.

Where: src/tagprobe/features/metadata/usecases/container_probe.py
What: Wrap the demuxer's open, stream-info and close steps in a context manager.
Why: Guarantee the handle is closed exactly once on every exit path.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from tagprobe.platform.logging import logger

from ..domain.errors import StreamInfoError
from .ports import ContainerHandle, DemuxerPort

__all__ = ["open_container"]


@contextmanager
def open_container(path: Path, demuxer: DemuxerPort) -> Iterator[ContainerHandle]:
    """Open ``path`` and probe its streams.

    Args:
        path: Filesystem path of the container.
        demuxer: Backend performing the actual parsing.

    Yields:
        ContainerHandle: Handle with stream information populated.

    Raises:
        ContainerOpenError: If the container cannot be opened. Nothing is
            left to close in that case.
        StreamInfoError: If stream information cannot be read. The handle
            is closed before the error propagates.
    """
    handle = demuxer.open(path)
    logger.debug("Opened container %s", path)
    try:
        try:
            handle.find_stream_info()
        except StreamInfoError:
            logger.debug("Stream info probe failed for %s", path)
            raise
        yield handle
    finally:
        handle.close()
        logger.debug("Closed container %s", path)
