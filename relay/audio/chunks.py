"""Fixed-size base64 chunking for outbound audio frames."""

from __future__ import annotations

import base64
from collections.abc import Iterator

from ..config.upstream import AUDIO_CHUNK_BYTES


def iter_base64_chunks(pcm: bytes, chunk_size: int = AUDIO_CHUNK_BYTES) -> Iterator[str]:
    """Yield ``pcm`` as base64 strings of at most ``chunk_size`` raw bytes.

    Chunk boundaries stay on whole samples as long as ``chunk_size`` is even.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    view = memoryview(pcm)
    for start in range(0, len(view), chunk_size):
        yield base64.b64encode(view[start:start + chunk_size]).decode("ascii")


__all__ = ["iter_base64_chunks"]
