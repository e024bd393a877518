"""Per-connection WebSocket lifecycle helpers (inactivity deadline, keepalive).

Each session gets a SessionLifecycle that:

1. Tracks the last inbound activity (updated via touch())
2. Runs one background task that wakes every WS_WATCHDOG_TICK_S to
   - close the connection once WS_CONNECTION_TIMEOUT_S passed without any
     inbound frame
   - send a ``{"type": "ping"}`` frame every WS_PING_INTERVAL_S
3. Fires the session's done signal when the deadline passes or a ping
   cannot be written

Usage:
    lifecycle = SessionLifecycle(websocket, writer, done)
    lifecycle.start()

    # In message loop:
    lifecycle.touch()

    # On cleanup:
    await lifecycle.stop()
"""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from collections.abc import Callable

from fastapi import WebSocket

from .writer import SessionWriter
from ..session.done import DoneSignal
from ...helpers.tasks import cancel_task
from ...config.websocket import (
    WS_PING_INTERVAL_S,
    WS_WATCHDOG_TICK_S,
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_CONNECTION_TIMEOUT_S,
)

logger = logging.getLogger(__name__)

PING_FRAME = {"type": "ping"}


class SessionLifecycle:
    """Enforces the inactivity deadline and sends keepalive pings.

    Attributes:
        timeout_s: Seconds without inbound frames before the session ends.
        ping_interval_s: Seconds between keepalive pings.
        tick_s: Watchdog resolution.
    """

    def __init__(
        self,
        websocket: WebSocket,
        writer: SessionWriter,
        done: DoneSignal,
        *,
        timeout_s: float = WS_CONNECTION_TIMEOUT_S,
        ping_interval_s: float = WS_PING_INTERVAL_S,
        tick_s: float = WS_WATCHDOG_TICK_S,
        now_fn: Callable[[], float] | None = None,
    ) -> None:
        self._ws = websocket
        self._writer = writer
        self._done = done
        self.timeout_s = float(timeout_s)
        self.ping_interval_s = float(ping_interval_s)
        self.tick_s = float(tick_s)
        self._now = now_fn or time.monotonic
        self._last_activity = self._now()
        self._last_ping = self._last_activity
        self._task: asyncio.Task | None = None
        self.pings_sent = 0

    def touch(self) -> None:
        """Record inbound activity (pushes the deadline forward)."""
        self._last_activity = self._now()

    def should_close(self) -> bool:
        return self._done.fired

    def start(self) -> asyncio.Task:
        """Start the watchdog task (idempotent)."""
        if self._task is None:
            self._task = asyncio.create_task(self._watchdog_loop(), name="ws-lifecycle")
        return self._task

    async def stop(self) -> None:
        """Stop the watchdog task and wait for it to finish."""
        await cancel_task(self._task)
        self._task = None

    async def _wait_tick(self) -> None:
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(self._done.wait(), timeout=self.tick_s)

    async def _watchdog_loop(self) -> None:
        while not self._done.fired:
            await self._wait_tick()
            if self._done.fired:
                return
            now = self._now()
            if (now - self._last_activity) >= self.timeout_s:
                logger.info("WebSocket inactive for %.0fs; closing connection", now - self._last_activity)
                if self._done.fire("idle_timeout"):
                    await self._close_ws()
                return
            if self.ping_interval_s > 0 and (now - self._last_ping) >= self.ping_interval_s:
                self._last_ping = now
                if not await self._writer.send_json(PING_FRAME):
                    logger.info("keepalive ping failed; ending session")
                    self._done.fire("keepalive_failed")
                    return
                self.pings_sent += 1
                logger.debug("keepalive ping sent")

    async def _close_ws(self) -> None:
        """Close the WebSocket with idle timeout code/reason."""
        with contextlib.suppress(Exception):
            await self._ws.close(code=WS_CLOSE_IDLE_CODE, reason=WS_CLOSE_IDLE_REASON)


__all__ = ["SessionLifecycle", "PING_FRAME"]
