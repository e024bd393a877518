"""Realtime vendor wire protocol: outbound payloads and inbound event mapping.

Outbound events:
    session.update              instructions, voice, output modality
    conversation.item.create    one user message with an input_text part
    response.create             trigger generation for the conversation

The session update deliberately carries no audio format field. The vendor
default (24 kHz PCM16) is what the browser player expects, and setting the
format explicitly has produced distorted playback.

Inbound events are mapped onto the closed set in ``relay.upstream.events``.
GA names (``response.output_audio.*``) and beta names (``response.audio.*``)
are both accepted.
"""

from __future__ import annotations

import logging
from typing import Any

import orjson

from ..events import (
    AudioDelta,
    AudioDone,
    ResponseDone,
    TextDelta,
    TextDone,
    Unrecognized,
    UpstreamErrorEvent,
    UpstreamEvent,
)

logger = logging.getLogger(__name__)

_TEXT_DELTA_TYPES = frozenset({
    "response.output_audio_transcript.delta",
    "response.audio_transcript.delta",
    "response.output_text.delta",
    "response.text.delta",
})
_TEXT_DONE_TYPES = frozenset({
    "response.output_audio_transcript.done",
    "response.audio_transcript.done",
    "response.output_text.done",
    "response.text.done",
})
_AUDIO_DELTA_TYPES = frozenset({
    "response.output_audio.delta",
    "response.audio.delta",
})
_AUDIO_DONE_TYPES = frozenset({
    "response.output_audio.done",
    "response.audio.done",
})


def session_update(instructions: str, voice: str) -> dict[str, Any]:
    return {
        "type": "session.update",
        "session": {
            "type": "realtime",
            "instructions": instructions,
            "output_modalities": ["audio"],
            "audio": {"output": {"voice": voice}},
        },
    }


def user_message(text: str) -> dict[str, Any]:
    return {
        "type": "conversation.item.create",
        "item": {
            "type": "message",
            "role": "user",
            "content": [{"type": "input_text", "text": text}],
        },
    }


def response_create() -> dict[str, Any]:
    return {"type": "response.create"}


def _error_detail(event: dict[str, Any]) -> str:
    error = event.get("error")
    if isinstance(error, dict):
        return str(error.get("message") or error.get("code") or error.get("type") or "unknown error")
    return str(error or "unknown error")


def parse_realtime_event(event: dict[str, Any]) -> UpstreamEvent:
    """Map one decoded vendor event onto an upstream event."""
    event_type = str(event.get("type") or "")
    if event_type in _TEXT_DELTA_TYPES:
        return TextDelta(text=str(event.get("delta") or ""))
    if event_type in _AUDIO_DELTA_TYPES:
        return AudioDelta(audio=str(event.get("delta") or ""))
    if event_type in _TEXT_DONE_TYPES:
        return TextDone()
    if event_type in _AUDIO_DONE_TYPES:
        return AudioDone()
    if event_type == "response.done":
        return ResponseDone()
    if event_type == "error":
        return UpstreamErrorEvent(detail=_error_detail(event))
    return Unrecognized(event_type=event_type or "<missing>")


def decode_realtime_message(raw: str | bytes) -> UpstreamEvent:
    """Decode a raw frame from the vendor socket.

    Undecodable frames map to ``Unrecognized`` rather than raising so a
    single bad frame never tears down the event pump.
    """
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError:
        logger.warning("realtime: undecodable frame (%d bytes)", len(raw))
        return Unrecognized(event_type="<invalid-json>")
    if not isinstance(data, dict):
        return Unrecognized(event_type="<non-object>")
    return parse_realtime_event(data)


__all__ = [
    "session_update",
    "user_message",
    "response_create",
    "parse_realtime_event",
    "decode_realtime_message",
]
