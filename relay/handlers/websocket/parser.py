"""Client payload parsing for the WebSocket handler.

Client frames are JSON objects with a ``type`` discriminator:

    {"type": "message", "message": "<user text>"}
    {"type": "ping"} / {"type": "pong"}
"""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass

import orjson


@dataclass(frozen=True, slots=True)
class ClientMessage:
    type: str
    message: Any = None


def parse_client_message(raw: str | bytes) -> ClientMessage:
    """Decode one client frame.

    Raises:
        ValueError: The frame is not a JSON object.
    """
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError("Message must be valid JSON.") from exc

    if not isinstance(data, dict):
        raise ValueError("Message must be a JSON object.")

    msg_type = data.get("type")
    msg_type = msg_type.strip().lower() if isinstance(msg_type, str) else ""
    return ClientMessage(type=msg_type, message=data.get("message"))


__all__ = ["ClientMessage", "parse_client_message"]
