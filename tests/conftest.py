"""Shared pytest fixtures: fake demuxer collaborators and real descriptors."""

from __future__ import annotations

import os
import struct
import wave
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from tagprobe.features.metadata.adapters import DecoderRegistry
from tagprobe.features.metadata.domain import ContainerOpenError, MediaType, StreamInfoError
from tagprobe.features.metadata.usecases import TagEntry

PROC_FD_AVAILABLE: bool = Path("/proc/self/fd").is_dir()

# One silent MPEG-1 Layer III frame: 128 kbps, 44.1 kHz, stereo, 417 bytes.
MP3_FRAME: bytes = b"\xff\xfb\x90\x00" + bytes(413)


@dataclass
class FakeStream:
    """In-memory stream handle."""

    index: int = 0
    media_type: MediaType = MediaType.AUDIO
    codec_id: str | None = "flac"
    sample_rate: int = 44100
    channels: int = 2
    entries: Sequence[TagEntry] = ()

    def tags(self) -> Iterator[TagEntry]:
        return iter(list(self.entries))


@dataclass
class FakeContainer:
    """In-memory container handle that counts lifecycle calls."""

    entries: Sequence[TagEntry] = ()
    stream_list: Sequence[FakeStream] = ()
    bit_rate: int = 320_000
    duration: int = 215_000_000
    fail_stream_info: bool = False
    tags_error: Exception | None = None
    close_calls: int = 0
    stream_info_calls: int = 0

    @property
    def streams(self) -> Sequence[FakeStream]:
        return tuple(self.stream_list)

    def find_stream_info(self) -> None:
        self.stream_info_calls += 1
        if self.fail_stream_info:
            raise StreamInfoError(Path("fake"), "probe failed")

    def tags(self) -> Iterator[TagEntry]:
        if self.tags_error is not None:
            raise self.tags_error
        return iter(list(self.entries))

    def close(self) -> None:
        self.close_calls += 1


@dataclass
class FakeDemuxer:
    """Demuxer handing out a fresh FakeContainer for every open."""

    factory: Callable[[], FakeContainer] = FakeContainer
    fail_open: bool = False
    opened: list[Path] = field(default_factory=list)
    containers: list[FakeContainer] = field(default_factory=list)

    def open(self, path: Path) -> FakeContainer:
        self.opened.append(path)
        if self.fail_open:
            raise ContainerOpenError(path, "cannot open")
        container = self.factory()
        self.containers.append(container)
        return container


@pytest.fixture
def make_stream() -> Callable[..., FakeStream]:
    """Build fake streams with keyword overrides."""

    return FakeStream


@pytest.fixture
def make_demuxer() -> Callable[..., FakeDemuxer]:
    """Build a fake demuxer whose containers use the given keyword arguments."""

    def _make(*, fail_open: bool = False, **container_kwargs: Any) -> FakeDemuxer:
        return FakeDemuxer(
            factory=lambda: FakeContainer(**container_kwargs),
            fail_open=fail_open,
        )

    return _make


@pytest.fixture
def decoders() -> DecoderRegistry:
    return DecoderRegistry()


@pytest.fixture
def audio_fd(tmp_path: Path) -> Iterator[int]:
    """Open descriptor on a placeholder file; closed after the test."""

    target = tmp_path / "track.flac"
    _ = target.write_bytes(b"fLaC")
    fd = os.open(target, os.O_RDONLY)
    try:
        yield fd
    finally:
        os.close(fd)


def write_wav(
    path: Path,
    *,
    sample_rate: int = 44100,
    channels: int = 2,
    sample_width: int = 2,
    frames: int = 4410,
) -> Path:
    """Write a silent PCM WAVE file."""

    with wave.open(str(path), "wb") as handle:
        handle.setnchannels(channels)
        handle.setsampwidth(sample_width)
        handle.setframerate(sample_rate)
        handle.writeframes(b"\x00" * frames * channels * sample_width)
    return path


@pytest.fixture
def wav_file(tmp_path: Path) -> Path:
    return write_wav(tmp_path / "silence.wav")


@pytest.fixture
def tagged_wav(tmp_path: Path) -> Path:
    """WAVE file carrying an ID3 chunk with canonical and extra frames."""

    from mutagen.id3 import COMM, TALB, TCON, TIT2, TPE1, TXXX
    from mutagen.wave import WAVE

    path = write_wav(tmp_path / "tagged.wav")
    audio = WAVE(path)
    audio.add_tags()
    assert audio.tags is not None
    audio.tags.add(TIT2(encoding=3, text=["Comfortably Numb"]))
    audio.tags.add(TPE1(encoding=3, text=["Pink Floyd", "Roger Waters"]))
    audio.tags.add(TALB(encoding=3, text=["The Wall"]))
    audio.tags.add(TCON(encoding=3, text=["Rock"]))
    audio.tags.add(TXXX(encoding=3, desc="mood", text=["happy"]))
    audio.tags.add(COMM(encoding=3, lang="eng", desc="", text=["nice"]))
    audio.save()
    return path


@pytest.fixture
def open_fd_count() -> Callable[[], int]:
    """Count descriptors currently open in this process (Linux only)."""

    if not PROC_FD_AVAILABLE:
        pytest.skip("requires /proc/self/fd")

    def _count() -> int:
        return len(os.listdir("/proc/self/fd"))

    return _count


@pytest.fixture
def make_wav(tmp_path: Path) -> Callable[..., Path]:
    """Write WAVE files under ``tmp_path`` with custom parameters."""

    def _make(name: str = "custom.wav", **params: int) -> Path:
        return write_wav(tmp_path / name, **params)

    return _make


def write_mp3(path: Path, *, frames: int = 50) -> Path:
    """Write a run of silent MPEG audio frames."""

    _ = path.write_bytes(MP3_FRAME * frames)
    return path


@pytest.fixture
def tagged_mp3(tmp_path: Path) -> Path:
    """MP3 with an ID3v2 header carrying canonical, TXXX and COMM frames."""

    from mutagen.id3 import COMM, ID3, TALB, TIT2, TPE1, TXXX

    path = write_mp3(tmp_path / "tagged.mp3")
    tags = ID3()
    tags.add(TIT2(encoding=3, text=["Song"]))
    tags.add(TPE1(encoding=3, text=["Band"]))
    tags.add(TALB(encoding=3, text=["Record"]))
    tags.add(TXXX(encoding=3, desc="mood", text=["happy"]))
    tags.add(COMM(encoding=3, lang="eng", desc="", text=["nice"]))
    tags.save(path)
    return path


def write_ogg_vorbis(
    path: Path,
    comments: Sequence[tuple[str, str]],
    *,
    sample_rate: int = 44100,
    channels: int = 2,
    samples: int = 44100,
) -> Path:
    """Write an Ogg Vorbis stream: identification, comment and one audio page."""

    from mutagen._vorbis import VComment
    from mutagen.ogg import OggPage

    identification = (
        b"\x01vorbis"
        + struct.pack("<IBIiiiB", 0, channels, sample_rate, 0, 128_000, 0, 0xB8)
        + b"\x01"
    )
    tags = VComment()
    tags.extend(comments)
    packets = [
        (identification, 0),
        (b"\x03vorbis" + tags.write(), 0),
        (bytes(16), samples),
    ]

    pages: list[OggPage] = []
    for sequence, (packet, position) in enumerate(packets):
        page = OggPage()
        page.serial = 0x5EED
        page.sequence = sequence
        page.position = position
        page.packets = [packet]
        pages.append(page)
    pages[0].first = True
    pages[-1].last = True

    _ = path.write_bytes(b"".join(page.write() for page in pages))
    return path


@pytest.fixture
def tagged_ogg(tmp_path: Path) -> Path:
    return write_ogg_vorbis(
        tmp_path / "tagged.ogg",
        [("TITLE", "Ogg Song"), ("ARTIST", "Ogg Band"), ("comment", "one"), ("comment", "two")],
    )
