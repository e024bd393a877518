"""Backend-neutral upstream events and their browser frame encoding.

Both backends produce the same closed set of events. Only the first five
kinds reach the browser; upstream error events and unrecognized vendor
events are logged by the consumer and dropped.

Frame protocol:
    {"type": "text_delta", "text": "..."}
    {"type": "text_done"}
    {"type": "audio_delta", "audio": "<base64 PCM16>"}
    {"type": "audio_done"}
    {"type": "response_done"}
"""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TextDelta:
    text: str


@dataclass(frozen=True, slots=True)
class TextDone:
    pass


@dataclass(frozen=True, slots=True)
class AudioDelta:
    """A chunk of mono 24 kHz PCM16, already base64 encoded."""

    audio: str


@dataclass(frozen=True, slots=True)
class AudioDone:
    pass


@dataclass(frozen=True, slots=True)
class ResponseDone:
    pass


@dataclass(frozen=True, slots=True)
class UpstreamErrorEvent:
    """An error reported in-band by the upstream. Never terminates a response."""

    detail: str


@dataclass(frozen=True, slots=True)
class Unrecognized:
    event_type: str


UpstreamEvent = (
    TextDelta
    | TextDone
    | AudioDelta
    | AudioDone
    | ResponseDone
    | UpstreamErrorEvent
    | Unrecognized
)


_BARE_FRAME_TYPES: dict[type, str] = {
    TextDone: "text_done",
    AudioDone: "audio_done",
    ResponseDone: "response_done",
}


def to_frame(event: UpstreamEvent) -> dict[str, Any] | None:
    """Return the browser frame for ``event``, or None if it is not forwarded."""
    if isinstance(event, TextDelta):
        return {"type": "text_delta", "text": event.text}
    if isinstance(event, AudioDelta):
        return {"type": "audio_delta", "audio": event.audio}
    frame_type = _BARE_FRAME_TYPES.get(type(event))
    if frame_type is None:
        return None
    return {"type": frame_type}


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
