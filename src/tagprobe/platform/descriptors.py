"""Descriptor to path resolution.

Where: src/tagprobe/platform/descriptors.py
What: Resolve an open file descriptor to the absolute path behind it.
Why: The demuxer opens inputs by path while hosts hand over descriptors.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Final, TypeAlias

__all__ = [
    "PathResolution",
    "ResolutionFailure",
    "ResolvedPath",
    "resolve_descriptor_path",
]

_PROC_FD_DIR: Final[Path] = Path("/proc/self/fd")
# MAXPATHLEN on Darwin; F_GETPATH fills a buffer of exactly this size.
_DARWIN_MAXPATHLEN: Final[int] = 1024


@dataclass(slots=True, frozen=True)
class ResolvedPath:
    """Descriptor resolved successfully."""

    path: Path


@dataclass(slots=True, frozen=True)
class ResolutionFailure:
    """Descriptor could not be mapped to a path."""

    fd: int
    reason: str


PathResolution: TypeAlias = ResolvedPath | ResolutionFailure


def _read_proc_link(fd: int) -> str:
    return os.readlink(_PROC_FD_DIR / str(fd))


def _read_darwin_path(fd: int) -> str:
    import fcntl

    buffer = fcntl.fcntl(fd, fcntl.F_GETPATH, bytes(_DARWIN_MAXPATHLEN))
    return os.fsdecode(buffer.split(b"\0", 1)[0])


def resolve_descriptor_path(fd: int) -> PathResolution:
    """Map ``fd`` to the absolute path of the file it refers to.

    Linux exposes every descriptor as a symbolic link under ``/proc/self/fd``;
    macOS answers the same question through ``fcntl(F_GETPATH)``.

    Args:
        fd: Open file descriptor owned by the caller.

    Returns:
        PathResolution: ``ResolvedPath`` on success, ``ResolutionFailure``
        when the link cannot be read or does not name a filesystem path.
    """
    if fd < 0:
        return ResolutionFailure(fd, "negative descriptor")

    try:
        if _PROC_FD_DIR.is_dir():
            target = _read_proc_link(fd)
        elif sys.platform == "darwin":
            target = _read_darwin_path(fd)
        else:
            return ResolutionFailure(fd, f"unsupported platform {sys.platform!r}")
    except OSError as exc:
        return ResolutionFailure(fd, exc.strerror or str(exc))

    # Pipes, sockets and anonymous inodes read back as e.g. "pipe:[1234]".
    if not os.path.isabs(target):
        return ResolutionFailure(fd, f"descriptor does not name a path: {target!r}")
    return ResolvedPath(Path(target))
