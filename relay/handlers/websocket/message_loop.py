"""WebSocket message loop and dispatch helpers."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from fastapi import WebSocket, WebSocketDisconnect

from .errors import send_error
from ...config import messages
from .parser import ClientMessage, parse_client_message
from .lifecycle import SessionLifecycle
from ..session.state import SessionState
from ...errors import RateLimitError, ValidationError
from ...messages import validate_user_message

if TYPE_CHECKING:
    from ...runtime.dependencies import SessionSettings

logger = logging.getLogger(__name__)


async def _receive_frame(ws: WebSocket) -> str | bytes:
    """Return the next data frame's payload; binary frames are passed through."""
    message = await ws.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
    text = message.get("text")
    if text is not None:
        return text
    return message.get("bytes") or b""


async def _recv_with_watchdog(
    ws: WebSocket,
    lifecycle: SessionLifecycle,
    tick_s: float,
) -> tuple[str | bytes | None, bool]:
    try:
        raw = await asyncio.wait_for(_receive_frame(ws), timeout=tick_s * 2)
        return raw, False
    except TimeoutError:
        return None, lifecycle.should_close()


async def _handle_control_message(state: SessionState, msg_type: str) -> None:
    if msg_type == "ping":
        await state.writer.send_json({"type": "pong"})


async def _handle_chat_message(
    state: SessionState,
    msg: ClientMessage,
    settings: SessionSettings,
) -> None:
    """Rate limit, validate and forward one user message."""
    try:
        state.limiter.consume()
    except RateLimitError as err:
        logger.info("message rate limited; retry in %.1fs", err.retry_in)
        await send_error(state.writer, messages.RATE_LIMITED)
        return

    try:
        text = validate_user_message(
            msg.message,
            min_length=settings.min_message_length,
            max_length=settings.max_message_length,
        )
    except ValidationError as err:
        logger.info("message rejected: %s", err.error_code)
        await send_error(state.writer, err.message)
        return

    if state.dispatcher is None:
        raise RuntimeError("session has no upstream dispatcher")
    state.messages_forwarded += 1
    logger.info("WS recv: message len=%s", len(text))
    await state.dispatcher.handle_user_text(text)


async def run_message_loop(
    ws: WebSocket,
    lifecycle: SessionLifecycle,
    state: SessionState,
    settings: SessionSettings,
) -> None:
    """Receive, validate, and dispatch client frames until the session ends.

    Returns when the done signal fires; browser disconnects propagate as
    ``WebSocketDisconnect`` for the connection handler to classify.
    """
    while not state.done.fired:
        raw, should_close = await _recv_with_watchdog(ws, lifecycle, settings.watchdog_tick_s)
        if raw is None:
            if should_close:
                break
            continue

        lifecycle.touch()
        state.messages_received += 1

        try:
            msg = parse_client_message(raw)
        except ValueError as exc:
            logger.info("unparseable client frame: %s", exc)
            await send_error(state.writer, messages.INVALID_MESSAGE_FORMAT)
            continue

        if msg.type in {"ping", "pong"}:
            await _handle_control_message(state, msg.type)
            continue

        if msg.type != "message":
            logger.info("unsupported message type %r", msg.type)
            await send_error(state.writer, messages.INVALID_MESSAGE_TYPE)
            continue

        await _handle_chat_message(state, msg, settings)


__all__ = ["run_message_loop"]
