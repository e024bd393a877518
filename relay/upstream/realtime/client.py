"""Realtime vendor client.

``RealtimeClient.connect`` opens one duplex WebSocket per browser session.
The returned ``RealtimeConnection`` is the handle: configure it once, then
send user messages and read events until it fails or is closed. A handle
that raised ``SendFailedError`` or ``StreamEndedError`` is dead and must be
discarded by its owner.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Awaitable, Callable

import orjson
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from .protocol import response_create, session_update, user_message, decode_realtime_message
from ..events import UpstreamEvent
from ...config.upstream import OPENAI_REALTIME_URL, REALTIME_VOICE
from ...errors import ConfigRejectedError, SendFailedError, StreamEndedError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

# Audio deltas for a long answer arrive as large frames
_MAX_FRAME_BYTES = 16 * 1024 * 1024
_OPEN_TIMEOUT_S = 10.0

ConnectFn = Callable[..., Awaitable[ClientConnection]]


class RealtimeConnection:
    """One open realtime session (the upstream handle)."""

    def __init__(self, websocket: ClientConnection, *, voice: str, model: str) -> None:
        self._ws = websocket
        self.voice = voice
        self.model = model
        self._send_lock = asyncio.Lock()
        self._closed = False
        self._failed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def usable(self) -> bool:
        """False once the handle was closed or any send or read on it failed."""
        return not (self._closed or self._failed)

    async def _send(self, payload: dict[str, Any]) -> None:
        if not self.usable:
            raise SendFailedError("realtime connection is not usable")
        message = orjson.dumps(payload).decode("utf-8")
        async with self._send_lock:
            try:
                await self._ws.send(message)
            except (ConnectionClosed, OSError) as exc:
                self._failed = True
                raise SendFailedError(f"realtime send failed: {exc}") from exc
        logger.debug("realtime send type=%s", payload.get("type"))

    async def configure(self, system_prompt: str) -> None:
        """Apply instructions, voice and audio output modality.

        Raises:
            ConfigRejectedError: The session update could not be sent.
        """
        try:
            await self._send(session_update(system_prompt, self.voice))
        except SendFailedError as exc:
            raise ConfigRejectedError(str(exc)) from exc

    async def send_user_text(self, text: str) -> None:
        await self._send(user_message(text))

    async def request_response(self) -> None:
        await self._send(response_create())

    async def read_event(self) -> UpstreamEvent:
        """Block until the next vendor event arrives.

        Raises:
            StreamEndedError: The connection closed or failed.
        """
        try:
            raw = await self._ws.recv()
        except (ConnectionClosed, OSError) as exc:
            self._failed = True
            raise StreamEndedError(f"realtime stream ended: {exc}") from exc
        return decode_realtime_message(raw)

    async def close(self) -> None:
        """Close the vendor socket. Idempotent."""
        if self._closed:
            return
        self._closed = True
        try:
            await self._ws.close()
        except (WebSocketException, OSError):
            logger.debug("realtime close raised", exc_info=True)


class RealtimeClient:
    """Factory for realtime connections."""

    def __init__(
        self,
        api_key: str,
        *,
        url: str = OPENAI_REALTIME_URL,
        voice: str = REALTIME_VOICE,
        connect_fn: ConnectFn | None = None,
    ) -> None:
        self._api_key = api_key
        self._url = url
        self.voice = voice
        self._connect = connect_fn or connect

    async def connect(self, model: str) -> RealtimeConnection:
        """Open a realtime session for ``model``.

        Raises:
            UpstreamUnavailableError: The vendor could not be reached or
                refused the handshake.
        """
        url = f"{self._url}?model={model}"
        try:
            websocket = await self._connect(
                url,
                additional_headers={"Authorization": f"Bearer {self._api_key}"},
                compression=None,
                max_size=_MAX_FRAME_BYTES,
                open_timeout=_OPEN_TIMEOUT_S,
            )
        except (WebSocketException, OSError, TimeoutError) as exc:
            raise UpstreamUnavailableError(f"realtime connect failed: {exc}") from exc
        logger.info("realtime connected model=%s", model)
        return RealtimeConnection(websocket, voice=self.voice, model=model)


__all__ = ["RealtimeClient", "RealtimeConnection"]
