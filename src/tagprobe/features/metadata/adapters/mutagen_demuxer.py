"""Mutagen-backed demuxer adapter.

Where: src/tagprobe/features/metadata/adapters/mutagen_demuxer.py
What: Implement the demuxer port on top of mutagen's format detection and stream info.
Why: Probe containers in-process instead of spawning ffprobe.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Callable, Final, final

import mutagen
from mutagen import FileType, MutagenError
from mutagen._vorbis import VComment
from mutagen.aac import AAC
from mutagen.ac3 import AC3
from mutagen.aiff import AIFF
from mutagen.apev2 import APEv2, APETextValue
from mutagen.asf import ASF, ASFByteArrayAttribute, ASFTags
from mutagen.dsdiff import DSDIFF
from mutagen.dsf import DSF
from mutagen.flac import FLAC
from mutagen.id3 import ID3
from mutagen.monkeysaudio import MonkeysAudio
from mutagen.mp3 import MP3
from mutagen.mp4 import MP4, MP4Cover, MP4Tags
from mutagen.musepack import Musepack
from mutagen.oggflac import OggFLAC
from mutagen.oggopus import OggOpus
from mutagen.oggspeex import OggSpeex
from mutagen.oggtheora import OggTheora
from mutagen.oggvorbis import OggVorbis
from mutagen.optimfrog import OptimFROG
from mutagen.trueaudio import TrueAudio
from mutagen.wave import WAVE
from mutagen.wavpack import WavPack

from tagprobe.platform.logging import logger

from ..domain.errors import ContainerOpenError, StreamInfoError
from ..domain.models import MediaType
from ..usecases.ports import TagEntry

__all__ = [
    "DURATION_TIME_BASE",
    "MutagenContainer",
    "MutagenDemuxer",
    "MutagenStream",
    "codec_id_for",
    "iter_tag_entries",
]

# Durations are reported in microseconds.
DURATION_TIME_BASE: Final[int] = 1_000_000

# Ogg keeps comments in the logical bitstream's header packets.
_STREAM_SCOPED_TAGS: Final[tuple[type[FileType], ...]] = (
    OggVorbis,
    OggOpus,
    OggFLAC,
    OggSpeex,
    OggTheora,
)

_ID3_FRAME_KEYS: Final[dict[str, str]] = {
    "TALB": "album",
    "TCOM": "composer",
    "TCON": "genre",
    "TCOP": "copyright",
    "TDRC": "date",
    "TYER": "date",
    "TDRL": "date",
    "TDEN": "creation_time",
    "TENC": "encoded_by",
    "TIT1": "grouping",
    "TIT2": "title",
    "TLAN": "language",
    "TPE1": "artist",
    "TPE2": "album_artist",
    "TPE3": "performer",
    "TPOS": "disc",
    "TPUB": "publisher",
    "TRCK": "track",
    "TSSE": "encoder",
    "TSOA": "album-sort",
    "TSOP": "artist-sort",
    "TSOT": "title-sort",
    "COMM": "comment",
}

# iTunes atom names as FFmpeg reports them; freeform "----" atoms use their own name.
_MP4_ATOM_KEYS: Final[dict[str, str]] = {
    "©nam": "title",
    "©ART": "artist",
    "©alb": "album",
    "©gen": "genre",
    "aART": "album_artist",
    "©wrt": "composer",
    "©day": "date",
    "©cmt": "comment",
    "©grp": "grouping",
    "©too": "encoder",
    "©lyr": "lyrics",
    "cprt": "copyright",
    "desc": "description",
    "trkn": "track",
    "disk": "disc",
}

_ASF_ATTRIBUTE_KEYS: Final[dict[str, str]] = {
    "Title": "title",
    "Author": "artist",
    "WM/AlbumTitle": "album",
    "WM/Genre": "genre",
    "WM/AlbumArtist": "album_artist",
    "WM/Composer": "composer",
    "WM/Year": "date",
    "WM/TrackNumber": "track",
    "Description": "comment",
    "Copyright": "copyright",
}

_MPEG_LAYERS: Final[dict[int, str]] = {1: "mp1", 2: "mp2", 3: "mp3"}

_MP4_CODECS: Final[dict[str, str]] = {
    "mp4a.40": "aac",
    "mp4a.67": "aac",
    "mp4a.69": "mp3",
    "mp4a.6b": "mp3",
    "alac": "alac",
    "ac-3": "ac3",
    "ec-3": "eac3",
    "flac": "flac",
    "opus": "opus",
}


def _to_text(value: Any) -> str:
    """Decode a tag value; raw bytes are treated as UTF-8."""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _mp4_codec(info: Any) -> str | None:
    codec = str(getattr(info, "codec", "")).lower()
    for prefix, codec_id in _MP4_CODECS.items():
        if codec == prefix or codec.startswith(prefix + "."):
            return codec_id
    return None


def _pcm_codec(info: Any, *, little_endian: bool) -> str:
    bits = int(getattr(info, "bits_per_sample", 16) or 16)
    if bits == 8:
        return "pcm_u8" if little_endian else "pcm_s8"
    return f"pcm_s{bits}{'le' if little_endian else 'be'}"


_CODEC_RESOLVERS: Final[tuple[tuple[type[FileType], Callable[[Any], str | None]], ...]] = (
    (MP3, lambda info: _MPEG_LAYERS.get(int(getattr(info, "layer", 3)))),
    (MP4, _mp4_codec),
    (FLAC, lambda _info: "flac"),
    (OggFLAC, lambda _info: "flac"),
    (OggVorbis, lambda _info: "vorbis"),
    (OggOpus, lambda _info: "opus"),
    (OggSpeex, lambda _info: "speex"),
    (OggTheora, lambda _info: "theora"),
    (WAVE, lambda info: _pcm_codec(info, little_endian=True)),
    (AIFF, lambda info: _pcm_codec(info, little_endian=False)),
    (DSF, lambda _info: "dsd_lsbf_planar"),
    (DSDIFF, lambda _info: "dsd_msbf"),
    (ASF, lambda _info: "wmav2"),
    (AAC, lambda _info: "aac"),
    (AC3, lambda info: "eac3" if str(getattr(info, "codec", "")).lower() == "ec-3" else "ac3"),
    (MonkeysAudio, lambda _info: "ape"),
    (WavPack, lambda _info: "wavpack"),
    (TrueAudio, lambda _info: "tta"),
    (Musepack, lambda info: f"musepack{int(getattr(info, 'version', 7))}"),
    (OptimFROG, lambda _info: "optimfrog"),
)


def codec_id_for(audio: FileType) -> str | None:
    """Derive a decoder lookup key from a mutagen file type."""
    for file_class, resolver in _CODEC_RESOLVERS:
        if isinstance(audio, file_class):
            return resolver(audio.info)
    return None


def _iter_id3_entries(tags: ID3) -> Iterator[TagEntry]:
    for frame in tags.values():
        frame_id: str = frame.FrameID
        if frame_id == "TXXX":
            key = str(frame.desc)
        else:
            key = _ID3_FRAME_KEYS.get(frame_id, frame_id)
        if frame_id == "TCON":
            values = list(frame.genres)
        elif hasattr(frame, "text"):
            text = frame.text
            values = list(text) if isinstance(text, (list, tuple)) else [text]
        else:
            logger.debug("Skipping non-text ID3 frame %s", frame_id)
            continue
        for value in values:
            yield key, _to_text(value)


def _mp4_value_text(value: Any) -> str:
    if isinstance(value, tuple):
        # trkn/disk pairs; a zero total means unknown.
        number, total = (tuple(value) + (0, 0))[:2]
        return f"{number}/{total}" if total else str(number)
    return _to_text(value)


def _iter_mp4_entries(tags: MP4Tags) -> Iterator[TagEntry]:
    for atom, values in tags.items():
        if atom.startswith("----:"):
            key = atom.rsplit(":", 1)[-1]
        else:
            key = _MP4_ATOM_KEYS.get(atom, atom)
        for value in values if isinstance(values, list) else [values]:
            if isinstance(value, MP4Cover):
                continue
            yield key, _mp4_value_text(value)


def _iter_asf_entries(tags: ASFTags) -> Iterator[TagEntry]:
    for name, attribute in tags:
        if isinstance(attribute, ASFByteArrayAttribute):
            continue
        yield _ASF_ATTRIBUTE_KEYS.get(name, name), _to_text(attribute.value)


def iter_tag_entries(tags: Any) -> Iterator[TagEntry]:
    """Flatten a mutagen tag container into ordered key/value pairs.

    Multi-valued keys produce one entry per value so duplicates survive.
    """
    if tags is None:
        return
    if isinstance(tags, VComment):
        for key, value in tags:
            yield key, _to_text(value)
    elif isinstance(tags, ID3):
        yield from _iter_id3_entries(tags)
    elif isinstance(tags, MP4Tags):
        yield from _iter_mp4_entries(tags)
    elif isinstance(tags, ASFTags):
        yield from _iter_asf_entries(tags)
    elif isinstance(tags, APEv2):
        for key, value in tags.items():
            if isinstance(value, APETextValue):
                for item in value:
                    yield key, _to_text(item)
    else:
        for key, value in tags.items():
            values = value if isinstance(value, list) else [value]
            for item in values:
                yield str(key), _to_text(item)


@dataclass(slots=True, frozen=True)
class MutagenStream:
    """Single stream derived from mutagen's stream info."""

    index: int
    media_type: MediaType
    codec_id: str | None
    sample_rate: int
    channels: int
    entries: tuple[TagEntry, ...] = ()

    def tags(self) -> Iterator[TagEntry]:
        return iter(self.entries)


@final
class MutagenContainer:
    """Opened container backed by a mutagen ``FileType``."""

    def __init__(self, path: Path, fileobj: IO[bytes], audio: FileType) -> None:
        self._path: Path = path
        self._fileobj: IO[bytes] | None = fileobj
        self._audio: FileType = audio
        self._streams: list[MutagenStream] = []
        self._bit_rate: int = 0
        self._duration: int = 0

    @property
    def streams(self) -> Sequence[MutagenStream]:
        return tuple(self._streams)

    @property
    def bit_rate(self) -> int:
        return self._bit_rate

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def closed(self) -> bool:
        return self._fileobj is None

    def _stream_scoped(self) -> bool:
        return isinstance(self._audio, _STREAM_SCOPED_TAGS)

    def find_stream_info(self) -> None:
        info = self._audio.info
        if info is None:
            raise StreamInfoError(self._path, "no stream information")
        try:
            length = float(getattr(info, "length", 0.0) or 0.0)
            bitrate = int(getattr(info, "bitrate", 0) or 0)
            sample_rate = int(getattr(info, "sample_rate", 0) or 0)
            channels = int(getattr(info, "channels", 0) or 0)
        except (TypeError, ValueError) as exc:
            raise StreamInfoError(self._path, f"unusable stream parameters: {exc}") from exc
        if sample_rate < 0 or channels < 0:
            raise StreamInfoError(self._path, "negative sample rate or channel count")

        self._duration = int(round(length * DURATION_TIME_BASE)) if length > 0 else 0
        self._bit_rate = bitrate

        if isinstance(self._audio, OggTheora):
            media_type = MediaType.VIDEO
        elif hasattr(info, "sample_rate"):
            media_type = MediaType.AUDIO
        else:
            logger.debug("%s exposes no audio stream", self._path)
            self._streams = []
            return

        stream_entries = (
            tuple(iter_tag_entries(self._audio.tags)) if self._stream_scoped() else ()
        )
        self._streams = [
            MutagenStream(
                index=0,
                media_type=media_type,
                codec_id=codec_id_for(self._audio),
                sample_rate=sample_rate,
                channels=channels,
                entries=stream_entries,
            )
        ]

    def tags(self) -> Iterator[TagEntry]:
        if self._stream_scoped():
            return iter(())
        return iter_tag_entries(self._audio.tags)

    def close(self) -> None:
        if self._fileobj is None:
            return
        self._fileobj.close()
        self._fileobj = None


@final
class MutagenDemuxer:
    """Demuxer port implementation using ``mutagen.File`` detection.

    Holds no state; one instance can serve any number of threads.
    """

    def open(self, path: Path) -> MutagenContainer:
        try:
            fileobj = open(path, "rb")
        except OSError as exc:
            raise ContainerOpenError(path, exc.strerror or str(exc)) from exc

        try:
            audio = self._detect(path, fileobj)
        except BaseException:
            fileobj.close()
            raise
        logger.debug("Detected %s for %s", type(audio).__name__, path)
        return MutagenContainer(path, fileobj, audio)

    def _detect(self, path: Path, fileobj: IO[bytes]) -> FileType:
        try:
            audio = mutagen.File(fileobj)
        except (MutagenError, OSError) as exc:
            raise ContainerOpenError(path, str(exc)) from exc
        if audio is None:
            raise ContainerOpenError(path, "unrecognized container format")
        return audio
