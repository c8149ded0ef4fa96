"""Value objects produced by the metadata extraction pipeline.

Where: src/tagprobe/features/metadata/domain/models.py
What: Define status codes, stream classifications and the immutable result record.
Why: Keep the output contract free of any demuxer or I/O concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Final


class ExtractionStatus(IntEnum):
    """Outcome of one extraction call.

    Numeric values match the codes expected by existing host callers.
    """

    SUCCESS = 0
    PATH_RESOLUTION_ERROR = 1001
    OPEN_ERROR = 1002
    STREAM_INFO_ERROR = 1003


class MediaType(str, Enum):
    """Classification of a stream inside a container."""

    UNKNOWN = "unknown"
    VIDEO = "video"
    AUDIO = "audio"
    DATA = "data"
    SUBTITLE = "subtitle"
    ATTACHMENT = "attachment"


_MEDIA_TYPE_NAMES: Final[dict[MediaType, str]] = {
    MediaType.VIDEO: "video",
    MediaType.AUDIO: "audio",
    MediaType.DATA: "data",
    MediaType.SUBTITLE: "subtitle",
    MediaType.ATTACHMENT: "attachment",
}


def media_type_name(media_type: MediaType) -> str | None:
    """Return the display string for a media type, or None when it has none."""
    return _MEDIA_TYPE_NAMES.get(media_type)


class CanonicalField(str, Enum):
    """Tag fields that get a dedicated slot in the result."""

    TITLE = "title"
    ARTIST = "artist"
    ALBUM = "album"
    GENRE = "genre"


class TagScope(str, Enum):
    """Which dictionary a tag entry was read from."""

    CONTAINER = "container"
    STREAM = "stream"


@dataclass(slots=True, frozen=True)
class CanonicalFields:
    """Canonical tag values; each is None until a matching tag is seen."""

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    genre: str | None = None

    def get(self, canonical: CanonicalField) -> str | None:
        return getattr(self, canonical.value)


@dataclass(slots=True, frozen=True)
class StreamInfo:
    """Properties of the selected audio stream."""

    sample_rate: int = 0
    channels: int = 0
    codec: str | None = None
    codec_type: str | None = None


@dataclass(slots=True, frozen=True)
class ContainerInfo:
    """Container-level figures, passed through as reported by the probe."""

    bitrate: int = 0
    duration: int = 0


@dataclass(slots=True, frozen=True)
class MetadataResult:
    """Everything extracted from one file.

    When ``status`` is not SUCCESS every other field keeps its default.
    """

    status: ExtractionStatus = ExtractionStatus.SUCCESS
    fields: CanonicalFields = field(default_factory=CanonicalFields)
    stream: StreamInfo = field(default_factory=StreamInfo)
    container: ContainerInfo = field(default_factory=ContainerInfo)
    extras_raw: tuple[str, ...] = ()

    @classmethod
    def failure(cls, status: ExtractionStatus) -> MetadataResult:
        """Build a result that carries only a failure status."""
        if status is ExtractionStatus.SUCCESS:
            raise ValueError("failure() requires a non-success status")
        return cls(status=status)

    @property
    def ok(self) -> bool:
        return self.status is ExtractionStatus.SUCCESS

    @property
    def title(self) -> str | None:
        return self.fields.title

    @property
    def artist(self) -> str | None:
        return self.fields.artist

    @property
    def album(self) -> str | None:
        return self.fields.album

    @property
    def genre(self) -> str | None:
        return self.fields.genre

    @property
    def sample_rate(self) -> int:
        return self.stream.sample_rate

    @property
    def channels(self) -> int:
        return self.stream.channels

    @property
    def codec(self) -> str | None:
        return self.stream.codec

    @property
    def codec_type(self) -> str | None:
        return self.stream.codec_type

    @property
    def bitrate(self) -> int:
        return self.container.bitrate

    @property
    def duration(self) -> int:
        return self.container.duration

    def to_dict(self) -> dict[str, Any]:
        """Render the record with the field names used by host callers."""
        return {
            "status": int(self.status),
            "bitrate": self.bitrate,
            "sampleRate": self.sample_rate,
            "channels": self.channels,
            "duration": self.duration,
            "codec": self.codec,
            "codecType": self.codec_type,
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "genre": self.genre,
            "extrasRaw": list(self.extras_raw),
        }


__all__ = [
    "CanonicalField",
    "CanonicalFields",
    "ContainerInfo",
    "ExtractionStatus",
    "MediaType",
    "MetadataResult",
    "StreamInfo",
    "TagScope",
    "media_type_name",
]
