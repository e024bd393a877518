"""Shared response helpers for WebSocket error handling.

Error frames share one shape with the rest of the outbound protocol:

    {"type": "error", "error": "<client-visible message>"}

The message is always one of the constants in ``relay.config.messages``;
upstream bodies and exception text never reach the browser.

Connections refused before the upgrade (bad credential, too many
connections, foreign origin) get a plain HTTP response when the server
supports the WebSocket denial extension, and a policy close code otherwise.
"""

from __future__ import annotations

import logging

from fastapi import WebSocket
from fastapi.responses import ORJSONResponse

from .writer import SessionWriter

logger = logging.getLogger(__name__)


async def send_error(writer: SessionWriter, message: str) -> bool:
    """Send an error frame; returns False if the session is gone."""
    return await writer.send_json({"type": "error", "error": message})


async def reject_connection(
    ws: WebSocket,
    *,
    status_code: int,
    message: str,
    close_code: int,
) -> None:
    """Refuse a WebSocket upgrade without accepting it.

    Args:
        ws: The pending WebSocket connection.
        status_code: HTTP status for the denial response (401, 403, 429).
        message: Body ``error`` field.
        close_code: Close code used when the denial extension is missing.
    """
    try:
        await ws.send_denial_response(ORJSONResponse({"error": message}, status_code=status_code))
    except RuntimeError:
        logger.debug("denial response unsupported; closing with code %s", close_code)
        await ws.close(code=close_code, reason=message)


__all__ = ["send_error", "reject_connection"]
