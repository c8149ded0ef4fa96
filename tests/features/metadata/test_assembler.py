"""Tests for the metadata assembler pipeline."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from pytest_mock import MockerFixture

from tagprobe.features.metadata.adapters import DecoderRegistry
from tagprobe.features.metadata.domain import (
    CanonicalFields,
    ContainerInfo,
    ExtractionStatus,
    MediaType,
    MetadataResult,
    StreamInfo,
)
from tagprobe.features.metadata.usecases import MetadataAssembler


def _assembler(demuxer: Any, decoders: DecoderRegistry) -> MetadataAssembler:
    return MetadataAssembler(demuxer=demuxer, decoders=decoders)


class TestFailureBranches:
    """Every failure yields a bare status and leaves no handle open."""

    def test_unresolvable_descriptor(
        self,
        make_demuxer: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer()

        result = _assembler(demuxer, decoders).extract(-1)

        assert result == MetadataResult(status=ExtractionStatus.PATH_RESOLUTION_ERROR)
        assert demuxer.opened == []

    def test_closed_descriptor(
        self,
        tmp_path: Path,
        make_demuxer: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        target = tmp_path / "gone.flac"
        _ = target.write_bytes(b"")
        fd = os.open(target, os.O_RDONLY)
        os.close(fd)
        demuxer = make_demuxer()

        result = _assembler(demuxer, decoders).extract(fd)

        assert result.status is ExtractionStatus.PATH_RESOLUTION_ERROR
        assert demuxer.opened == []

    def test_open_error(
        self,
        audio_fd: int,
        make_demuxer: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer(fail_open=True)

        result = _assembler(demuxer, decoders).extract(audio_fd)

        assert result == MetadataResult(status=ExtractionStatus.OPEN_ERROR)
        assert len(demuxer.opened) == 1
        assert demuxer.containers == []

    def test_stream_info_error(
        self,
        audio_fd: int,
        make_demuxer: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer(fail_stream_info=True, entries=[("title", "T")])

        result = _assembler(demuxer, decoders).extract(audio_fd)

        assert result == MetadataResult(status=ExtractionStatus.STREAM_INFO_ERROR)
        assert demuxer.containers[0].close_calls == 1

    def test_unexpected_error_propagates_after_close(
        self,
        audio_fd: int,
        make_demuxer: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer(tags_error=RuntimeError("dictionary corrupted"))

        with pytest.raises(RuntimeError, match="dictionary corrupted"):
            _ = _assembler(demuxer, decoders).extract(audio_fd)

        assert demuxer.containers[0].close_calls == 1


class TestSuccess:
    def test_full_result(
        self,
        audio_fd: int,
        make_demuxer: Callable[..., Any],
        make_stream: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer(
            entries=[
                ("TITLE", "Comfortably Numb"),
                ("artist", "Pink Floyd"),
                ("album", "The Wall"),
                ("genre", "Rock"),
                ("date", "1979"),
            ],
            stream_list=[
                make_stream(
                    codec_id="vorbis",
                    sample_rate=48000,
                    channels=2,
                    entries=[("encoder", "Lavf60")],
                )
            ],
            bit_rate=192_000,
            duration=382_000_000,
        )

        result = _assembler(demuxer, decoders).extract(audio_fd)

        assert result == MetadataResult(
            status=ExtractionStatus.SUCCESS,
            fields=CanonicalFields(
                title="Comfortably Numb",
                artist="Pink Floyd",
                album="The Wall",
                genre="Rock",
            ),
            stream=StreamInfo(
                sample_rate=48000,
                channels=2,
                codec="Vorbis",
                codec_type="audio",
            ),
            container=ContainerInfo(bitrate=192_000, duration=382_000_000),
            extras_raw=("date: 1979", "encoder: Lavf60"),
        )
        assert demuxer.containers[0].close_calls == 1

    def test_zero_streams_is_still_success(
        self,
        audio_fd: int,
        make_demuxer: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer(entries=[("title", "T")], stream_list=[])

        result = _assembler(demuxer, decoders).extract(audio_fd)

        assert result.status is ExtractionStatus.SUCCESS
        assert result.sample_rate == 0
        assert result.channels == 0
        assert result.codec is None
        assert result.codec_type is None
        assert result.title == "T"
        assert demuxer.containers[0].close_calls == 1

    def test_video_only_container_has_no_stream_info(
        self,
        audio_fd: int,
        make_demuxer: Callable[..., Any],
        make_stream: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer(
            stream_list=[
                make_stream(media_type=MediaType.VIDEO, entries=[("handler", "VideoHandler")])
            ]
        )

        result = _assembler(demuxer, decoders).extract(audio_fd)

        assert result.ok
        assert result.stream == StreamInfo()
        assert result.extras_raw == ()

    def test_artist_alias_precedence(
        self,
        audio_fd: int,
        make_demuxer: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer(entries=[("Artist", "A"), ("ARTISTS", "B"), ("artist", "C")])

        result = _assembler(demuxer, decoders).extract(audio_fd)

        assert result.artist == "A"
        assert result.extras_raw == ()

    def test_extras_order_container_then_stream(
        self,
        audio_fd: int,
        make_demuxer: Callable[..., Any],
        make_stream: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer(
            entries=[("title", "T"), ("mood", "happy")],
            stream_list=[make_stream(entries=[("comment", "nice")])],
        )

        result = _assembler(demuxer, decoders).extract(audio_fd)

        assert result.title == "T"
        assert result.extras_raw == ("mood: happy", "comment: nice")

    def test_duplicate_extras_survive(
        self,
        audio_fd: int,
        make_demuxer: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer(entries=[("comment", "one"), ("comment", "two")])

        result = _assembler(demuxer, decoders).extract(audio_fd)

        assert result.extras_raw == ("comment: one", "comment: two")

    def test_stream_tags_do_not_fill_canonical_fields(
        self,
        audio_fd: int,
        make_demuxer: Callable[..., Any],
        make_stream: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        """Only container tags populate title/artist/album/genre."""

        demuxer = make_demuxer(
            entries=[],
            stream_list=[make_stream(entries=[("title", "Ogg Title"), ("artist", "Ogg Artist")])],
        )

        result = _assembler(demuxer, decoders).extract(audio_fd)

        assert result.fields == CanonicalFields()
        assert result.extras_raw == ("title: Ogg Title", "artist: Ogg Artist")

    def test_only_selected_stream_tags_are_read(
        self,
        audio_fd: int,
        make_demuxer: Callable[..., Any],
        make_stream: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer(
            stream_list=[
                make_stream(index=0, media_type=MediaType.VIDEO, entries=[("handler", "video")]),
                make_stream(index=1, entries=[("language", "eng")]),
                make_stream(index=2, entries=[("language", "jpn")]),
            ]
        )

        result = _assembler(demuxer, decoders).extract(audio_fd)

        assert result.extras_raw == ("language: eng",)

    def test_passes_resolved_path_to_demuxer(
        self,
        audio_fd: int,
        tmp_path: Path,
        make_demuxer: Callable[..., Any],
        decoders: DecoderRegistry,
    ) -> None:
        demuxer = make_demuxer()

        _ = _assembler(demuxer, decoders).extract(audio_fd)

        assert demuxer.opened == [(tmp_path / "track.flac").resolve()]


def test_repeated_extraction_is_identical(
    audio_fd: int,
    make_demuxer: Callable[..., Any],
    make_stream: Callable[..., Any],
    decoders: DecoderRegistry,
) -> None:
    demuxer = make_demuxer(
        entries=[("title", "T"), ("mood", "happy")],
        stream_list=[make_stream(entries=[("comment", "nice")])],
    )
    assembler = _assembler(demuxer, decoders)

    first = assembler.extract(audio_fd)
    second = assembler.extract(audio_fd)

    assert first == second
    assert first is not second
    assert first.to_dict() == second.to_dict()


def test_no_handle_leak_over_many_invocations(
    audio_fd: int,
    make_demuxer: Callable[..., Any],
    make_stream: Callable[..., Any],
    decoders: DecoderRegistry,
) -> None:
    demuxer = make_demuxer(entries=[("title", "T")], stream_list=[make_stream()])
    assembler = _assembler(demuxer, decoders)

    for _ in range(10_000):
        assert assembler.extract(audio_fd).ok

    assert len(demuxer.containers) == 10_000
    assert all(container.close_calls == 1 for container in demuxer.containers)


def test_failure_logs_warning(
    audio_fd: int,
    make_demuxer: Callable[..., Any],
    decoders: DecoderRegistry,
    mocker: MockerFixture,
) -> None:
    warning = mocker.patch("tagprobe.features.metadata.usecases.assembler.logger.warning")

    _ = _assembler(make_demuxer(fail_open=True), decoders).extract(audio_fd)

    warning.assert_called_once()
