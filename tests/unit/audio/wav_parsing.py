"""Unit tests for WAV container parsing and PCM16 extraction."""

from __future__ import annotations

import struct
import logging

import pytest

from relay.audio import parse_wav, extract_pcm16
from relay.errors import MalformedContainerError, UnsupportedAudioFormatError
from tests.helpers.fake_upstream import build_wav


def test_extract_pcm16_preserves_sample_values() -> None:
    samples = [0, 1, -1, 32767, -32768, 1234, -4321]
    pcm = extract_pcm16(build_wav(samples))

    assert list(struct.unpack(f"<{len(samples)}h", pcm)) == samples


def test_parse_wav_reports_format_fields() -> None:
    audio = parse_wav(build_wav([1, 2, 3], sample_rate=22050))

    assert audio.sample_rate == 22050
    assert audio.channels == 1
    assert audio.bits_per_sample == 16
    assert len(audio.pcm) == 6


def test_oversized_data_size_reads_only_available_bytes() -> None:
    wav = build_wav([5, 6, 7], declared_data_size=0xFFFFFFFF)

    assert extract_pcm16(wav) == struct.pack("<3h", 5, 6, 7)


def test_zero_data_size_means_rest_of_input() -> None:
    wav = build_wav([9, -9], declared_data_size=0)

    assert extract_pcm16(wav) == struct.pack("<2h", 9, -9)


def test_truncated_input_never_reads_past_end() -> None:
    wav = build_wav([1, 2, 3, 4])
    for cut in range(len(wav) - 8, len(wav)):
        try:
            pcm = extract_pcm16(wav[:cut])
        except MalformedContainerError:
            continue
        assert len(pcm) <= cut
        assert len(pcm) % 2 == 0


def test_odd_trailing_byte_is_dropped() -> None:
    wav = build_wav(data=b"\x01\x00\x02")

    assert extract_pcm16(wav) == b"\x01\x00"


def test_skips_unknown_chunks_with_padding() -> None:
    wav = build_wav([42], extra_chunks=[(b"LIST", b"abc")])

    assert extract_pcm16(wav) == struct.pack("<h", 42)


def test_empty_chunk_before_data_is_skipped() -> None:
    wav = build_wav([1, -2, 3, -4], extra_chunks=[(b"LIST", b"")])

    assert extract_pcm16(wav) == struct.pack("<4h", 1, -2, 3, -4)


def test_rejects_non_riff_input() -> None:
    with pytest.raises(MalformedContainerError):
        extract_pcm16(b"not a wav file at all")


def test_rejects_missing_data_chunk() -> None:
    wav = build_wav([1])
    header_only = wav[: wav.index(b"data")]

    with pytest.raises(MalformedContainerError):
        extract_pcm16(header_only)


def test_rejects_8_bit_audio() -> None:
    wav = build_wav(data=b"\x80\x81\x82\x83", bits_per_sample=8)

    with pytest.raises(UnsupportedAudioFormatError) as exc_info:
        extract_pcm16(wav)
    assert exc_info.value.bits_per_sample == 8
    assert isinstance(exc_info.value, MalformedContainerError)


def test_unexpected_sample_rate_only_warns(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="relay.audio.wav"):
        pcm = extract_pcm16(build_wav([7], sample_rate=16000))

    assert pcm == struct.pack("<h", 7)
    assert "16000" in caplog.text
