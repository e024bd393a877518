"""Primary WebSocket connection handler orchestration.

This module contains the entry point for every ``/ws/chat`` connection. It
orchestrates:

1. Connection Setup:
   - Client address resolution (X-Forwarded-For from trusted proxies only)
   - Origin check
   - Bearer credential validation
   - Per-address admission (connection slot)

2. Session:
   - One done signal, one serialized writer, one token bucket
   - An upstream dispatcher that connects lazily on the first message
   - The lifecycle watchdog (inactivity deadline and keepalive pings)

3. Cleanup:
   - Done signal fired, watchdog stopped, upstream handle closed
   - Connection slot released exactly once

Message Types:
    message   - User text forwarded upstream
    ping/pong - Keep-alive heartbeat
"""

from __future__ import annotations

import uuid
import logging
import contextlib
from typing import TYPE_CHECKING

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from .writer import SessionWriter
from ...config import messages
from .message_loop import run_message_loop
from .lifecycle import SessionLifecycle
from .disconnects import is_expected_disconnect
from .errors import reject_connection
from ...logging import log_context
from ...telemetry import capture_error
from .auth import BearerCredential, authenticate_websocket
from ..limits import TokenBucketRateLimiter
from ..connections import AdmissionSlot
from ..session.done import DoneSignal
from ..session.state import SessionState
from ..session.factory import build_dispatcher
from ...helpers.network import resolve_client_address
from ...config.websocket import (
    WS_CLOSE_BUSY_CODE,
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_UNAUTHORIZED_CODE,
)

if TYPE_CHECKING:
    from ...runtime.dependencies import RuntimeDeps

logger = logging.getLogger(__name__)


def _client_address(ws: WebSocket, runtime_deps: RuntimeDeps) -> str:
    peer = ws.client.host if ws.client else None
    return resolve_client_address(peer, ws.headers, runtime_deps.settings.trusted_networks)


def _origin_allowed(ws: WebSocket, allowed_origins: tuple[str, ...]) -> bool:
    origin = ws.headers.get("origin")
    if not origin:
        return True
    return "*" in allowed_origins or origin in allowed_origins


async def _prepare_connection(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    client_address: str,
) -> tuple[BearerCredential, AdmissionSlot] | None:
    """Run the pre-upgrade checks.

    Performs three checks, in order:
    1. Origin (403, close 1008)
    2. Bearer credential (401, close 1008)
    3. Per-address admission (429, close 1013)

    Returns:
        The accepted credential and the acquired slot, or None if the
        connection was refused.
    """
    if not _origin_allowed(ws, runtime_deps.settings.allowed_origins):
        logger.warning("WebSocket origin rejected: %s", ws.headers.get("origin"))
        await reject_connection(
            ws,
            status_code=403,
            message=messages.ORIGIN_NOT_ALLOWED,
            close_code=WS_CLOSE_UNAUTHORIZED_CODE,
        )
        return None

    credential = authenticate_websocket(ws, runtime_deps.issuer)
    if credential is None:
        await reject_connection(
            ws,
            status_code=401,
            message=messages.AUTH_REQUIRED,
            close_code=WS_CLOSE_UNAUTHORIZED_CODE,
        )
        return None

    slot = runtime_deps.registry.try_acquire(client_address)
    if slot is None:
        await reject_connection(
            ws,
            status_code=429,
            message=messages.TOO_MANY_CONNECTIONS,
            close_code=WS_CLOSE_BUSY_CODE,
        )
        return None

    return credential, slot


async def _close_quietly(ws: WebSocket) -> None:
    if ws.application_state != WebSocketState.CONNECTED:
        return
    with contextlib.suppress(Exception):
        await ws.close(code=WS_CLOSE_NORMAL_CODE)


async def _serve_session(
    ws: WebSocket,
    runtime_deps: RuntimeDeps,
    *,
    session_id: str,
    client_address: str,
    credential: BearerCredential,
    slot: AdmissionSlot,
) -> None:
    settings = runtime_deps.settings
    done = DoneSignal()
    writer = SessionWriter(ws, done, send_timeout_s=settings.send_timeout_s)
    state = SessionState(
        session_id=session_id,
        client_address=client_address,
        slot=slot,
        limiter=TokenBucketRateLimiter(
            interval_seconds=settings.message_rate_interval_s,
            burst=settings.message_burst,
        ),
        done=done,
        writer=writer,
    )
    state.dispatcher = build_dispatcher(runtime_deps, writer=writer, done=done)
    lifecycle = SessionLifecycle(
        ws,
        writer,
        done,
        timeout_s=settings.connection_timeout_s,
        ping_interval_s=settings.ping_interval_s,
        tick_s=settings.watchdog_tick_s,
    )

    try:
        await ws.accept(subprotocol=credential.subprotocol)
        logger.info(
            "WebSocket connection accepted. Active from address: %s",
            runtime_deps.registry.count(client_address),
        )
        lifecycle.start()
        await run_message_loop(ws, lifecycle, state, settings)
    except Exception as exc:
        if is_expected_disconnect(exc):
            done.fire("client_closed")
        else:
            logger.exception("WebSocket session error")
            capture_error(exc, session_id=session_id, client_id=client_address)
            done.fire("read_error")
    finally:
        done.fire("session_end")
        await lifecycle.stop()
        await state.dispatcher.close()
        await _close_quietly(ws)
        logger.info(
            "WebSocket session closed reason=%s duration=%.1fs received=%s forwarded=%s",
            done.reason,
            state.duration_s(),
            state.messages_received,
            state.messages_forwarded,
        )


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    """Handle one browser connection from upgrade to teardown.

    This is the main entry point for WebSocket connections. It:
    1. Resolves the client address and runs the pre-upgrade checks
    2. Accepts the upgrade, echoing the subprotocol the token came in
    3. Runs the message loop until the session's done signal fires
    4. Releases the connection slot, whatever the exit path

    Args:
        ws: The incoming WebSocket connection from FastAPI.
        runtime_deps: Process-wide services built at startup.
    """
    client_address = _client_address(ws, runtime_deps)
    session_id = uuid.uuid4().hex

    with log_context(session_id=session_id, client_id=client_address):
        admitted = await _prepare_connection(ws, runtime_deps, client_address)
        if admitted is None:
            return

        credential, slot = admitted
        try:
            await _serve_session(
                ws,
                runtime_deps,
                session_id=session_id,
                client_address=client_address,
                credential=credential,
                slot=slot,
            )
        finally:
            slot.release()
            logger.info("connection slot released. Active total: %s", runtime_deps.registry.total())


__all__ = ["handle_websocket_connection"]
