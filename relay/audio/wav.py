"""WAV container parsing and PCM16 extraction.

TTS servers that stream their output often write placeholder sizes into the
RIFF and ``data`` chunk headers (0 or 0xFFFFFFFF) because the final length is
unknown when the header is flushed. The parser therefore walks chunk headers
itself instead of using :mod:`wave`, and clamps every declared chunk size to
the bytes actually present.
"""

from __future__ import annotations

import struct
import logging
from dataclasses import dataclass

from ..errors import MalformedContainerError, UnsupportedAudioFormatError

logger = logging.getLogger(__name__)

RIFF_HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8
FMT_MIN_SIZE = 16
SUPPORTED_BITS_PER_SAMPLE = 16
# The browser player is fixed at 24 kHz; 22.05 kHz plays back close enough
EXPECTED_SAMPLE_RATES = (24000, 22050)

_CHUNK_HEADER = struct.Struct("<4sI")
_FMT_FIELDS = struct.Struct("<HHIIHH")


@dataclass(frozen=True, slots=True)
class WavAudio:
    """Decoded format fields plus the raw little-endian sample payload."""

    sample_rate: int
    channels: int
    bits_per_sample: int
    pcm: bytes


def _chunk_bounds(data: bytes, offset: int) -> tuple[bytes, int, int]:
    """Return (chunk_id, payload_start, payload_end) with the size clamped.

    Only the ``data`` chunk treats a declared size of 0 as "rest of input";
    streaming encoders write that placeholder. Other chunks may be empty.
    """
    chunk_id, declared = _CHUNK_HEADER.unpack_from(data, offset)
    start = offset + CHUNK_HEADER_SIZE
    remaining = len(data) - start
    if declared > remaining or (declared == 0 and chunk_id == b"data"):
        return chunk_id, start, len(data)
    return chunk_id, start, start + declared


def parse_wav(data: bytes) -> WavAudio:
    """Parse a RIFF/WAVE container holding 16-bit PCM.

    Raises:
        MalformedContainerError: Missing RIFF/WAVE header, ``fmt `` chunk or
            ``data`` chunk.
        UnsupportedAudioFormatError: Bit depth other than 16.
    """
    if len(data) < RIFF_HEADER_SIZE or data[0:4] != b"RIFF" or data[8:12] != b"WAVE":
        raise MalformedContainerError("missing RIFF/WAVE header")

    fmt: tuple[int, int, int, int, int, int] | None = None
    pcm: bytes | None = None
    offset = RIFF_HEADER_SIZE

    while offset + CHUNK_HEADER_SIZE <= len(data):
        chunk_id, start, end = _chunk_bounds(data, offset)
        if chunk_id == b"fmt ":
            if end - start < FMT_MIN_SIZE:
                raise MalformedContainerError("fmt chunk too short")
            fmt = _FMT_FIELDS.unpack_from(data, start)
        elif chunk_id == b"data":
            pcm = bytes(data[start:end])
            logger.debug("data chunk: %d bytes", len(pcm))
            # Anything after the samples is trailing metadata
            break
        # Chunks are word aligned; odd sizes carry one pad byte
        offset = end + (end - start) % 2

    if fmt is None:
        raise MalformedContainerError("fmt chunk not found")
    if pcm is None:
        raise MalformedContainerError("data chunk not found")

    _format_tag, channels, sample_rate, _byte_rate, _block_align, bits = fmt
    if bits != SUPPORTED_BITS_PER_SAMPLE:
        raise UnsupportedAudioFormatError(bits)
    if sample_rate not in EXPECTED_SAMPLE_RATES:
        logger.warning(
            "WAV sample rate is %d Hz, expected 24000 Hz; audio may play at the wrong pitch",
            sample_rate,
        )
    if len(pcm) % 2:
        pcm = pcm[:-1]
    return WavAudio(sample_rate=sample_rate, channels=channels, bits_per_sample=bits, pcm=pcm)


def extract_pcm16(data: bytes) -> bytes:
    """Return the raw little-endian PCM16 samples of a WAV container."""
    return parse_wav(data).pcm


__all__ = [
    "WavAudio",
    "EXPECTED_SAMPLE_RATES",
    "parse_wav",
    "extract_pcm16",
]
