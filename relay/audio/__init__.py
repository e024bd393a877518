"""Audio transcoding for the local pipeline backend."""

from .chunks import iter_base64_chunks
from .wav import WavAudio, parse_wav, extract_pcm16

__all__ = [
    "WavAudio",
    "parse_wav",
    "extract_pcm16",
    "iter_base64_chunks",
]
