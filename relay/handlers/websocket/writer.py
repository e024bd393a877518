"""Serialized outbound frame writer for one browser socket.

The keepalive task, the upstream event pump and the reader task all write
to the same socket. Every frame goes through ``SessionWriter.send_json``,
which holds one lock for the whole write so frames never interleave.

A failed or timed-out write fires the session's done signal; the socket is
presumed unusable and nothing is retried. After the signal has fired every
write is skipped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import orjson
from fastapi import WebSocket

from .disconnects import is_expected_disconnect
from ..session.done import DoneSignal
from ...config.websocket import WS_SEND_TIMEOUT_S

logger = logging.getLogger(__name__)


class SessionWriter:
    def __init__(
        self,
        ws: WebSocket,
        done: DoneSignal,
        *,
        send_timeout_s: float = WS_SEND_TIMEOUT_S,
    ) -> None:
        self._ws = ws
        self._done = done
        self._send_timeout_s = send_timeout_s
        self._lock = asyncio.Lock()
        self.frames_sent = 0

    async def send_json(self, payload: dict[str, Any]) -> bool:
        """Send one JSON frame. Returns False if the session is gone."""
        if self._done.fired:
            return False
        text = orjson.dumps(payload).decode("utf-8")
        async with self._lock:
            if self._done.fired:
                return False
            try:
                await asyncio.wait_for(self._ws.send_text(text), timeout=self._send_timeout_s)
            except TimeoutError:
                logger.warning("send of %s frame timed out after %.1fs", payload.get("type"), self._send_timeout_s)
                self._done.fire("write_timeout")
                return False
            except Exception as exc:
                if not is_expected_disconnect(exc):
                    raise
                logger.info("socket gone while sending %s frame", payload.get("type"))
                self._done.fire("write_failed")
                return False
        self.frames_sent += 1
        return True


__all__ = ["SessionWriter"]
