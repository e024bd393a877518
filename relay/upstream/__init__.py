"""Upstream backends.

Exactly one backend is active per deployment:

- realtime: duplex WebSocket session with the vendor realtime API
- local: streaming chat completion followed by speech synthesis

Both produce the event types defined in ``events``.
"""

from .events import (
    TextDelta,
    TextDone,
    AudioDelta,
    AudioDone,
    ResponseDone,
    Unrecognized,
    UpstreamEvent,
    UpstreamErrorEvent,
    to_frame,
)

__all__ = [
    "TextDelta",
    "TextDone",
    "AudioDelta",
    "AudioDone",
    "ResponseDone",
    "UpstreamErrorEvent",
    "Unrecognized",
    "UpstreamEvent",
    "to_frame",
]
