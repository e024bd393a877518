"""Realtime backend dispatcher: lazy connect, reconnect on demand, event pump.

The upstream handle is a tagged state guarded by one ``asyncio.Lock``:

    EMPTY   no handle yet (fresh session)
    OPEN    handle connected and configured, event pump running
    FAILED  last handle died; the next message reconnects

Every send goes through ``_acquire`` which, under the lock, either returns
the open handle or connects and configures a new one. Two messages can
therefore never race to open two handles, and a handle marked dead is
cleared before anything else can observe it as open.

Failure policy:
    - connect/configure failure: error frame, state FAILED, session survives
    - send failure: handle invalidated, error frame
    - mid-stream read failure: handle invalidated silently; the next user
      message reconnects
"""

from __future__ import annotations

import enum
import asyncio
import logging

from .done import DoneSignal
from ...telemetry import capture_error
from ...helpers.tasks import cancel_task
from ..websocket.writer import SessionWriter
from ..websocket.errors import send_error
from ...config import messages
from ...upstream.events import ResponseDone, Unrecognized, UpstreamErrorEvent, to_frame
from ...upstream.realtime import RealtimeClient, RealtimeConnection
from ...errors import (
    SendFailedError,
    StreamEndedError,
    ConfigRejectedError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


class HandleState(enum.Enum):
    EMPTY = "empty"
    OPEN = "open"
    FAILED = "failed"


class RealtimeDispatcher:
    """Owns one session's realtime handle and its event pump."""

    def __init__(
        self,
        client: RealtimeClient,
        *,
        model: str,
        system_prompt: str,
        writer: SessionWriter,
        done: DoneSignal,
        strict_single_flight: bool = False,
    ) -> None:
        self._client = client
        self._model = model
        self._system_prompt = system_prompt
        self._writer = writer
        self._done = done
        self._strict = strict_single_flight
        self._lock = asyncio.Lock()
        self._state = HandleState.EMPTY
        self._handle: RealtimeConnection | None = None
        self._pump_task: asyncio.Task | None = None
        self._busy = False
        self.connect_attempts = 0

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._busy

    async def _acquire(self) -> RealtimeConnection:
        """Return the open handle, connecting and configuring one if needed.

        Raises:
            UpstreamUnavailableError: Connecting failed.
            ConfigRejectedError: The new handle could not be configured.
        """
        async with self._lock:
            handle = self._handle
            if self._state is HandleState.OPEN and handle is not None:
                if handle.usable:
                    return handle
                # Died since the last message; its pump may not have noticed yet
                self._handle = None
                self._state = HandleState.FAILED
                await handle.close()

            self.connect_attempts += 1
            try:
                handle = await self._client.connect(self._model)
            except UpstreamUnavailableError:
                self._state = HandleState.FAILED
                raise
            try:
                await handle.configure(self._system_prompt)
            except ConfigRejectedError:
                self._state = HandleState.FAILED
                await handle.close()
                raise

            self._handle = handle
            self._state = HandleState.OPEN
            await self._start_pump(handle)
            logger.info("realtime handle opened (attempt %d)", self.connect_attempts)
            return handle

    async def _start_pump(self, handle: RealtimeConnection) -> None:
        # Replace, never duplicate: at most one pump reads for this session
        await cancel_task(self._pump_task)
        self._pump_task = asyncio.create_task(self._pump(handle), name="realtime-pump")

    async def _invalidate(self, handle: RealtimeConnection, reason: str) -> None:
        """Clear ``handle`` if it is still the current one, then close it."""
        async with self._lock:
            if self._handle is handle:
                self._handle = None
                self._state = HandleState.FAILED
                self._busy = False
                logger.info("realtime handle invalidated: %s", reason)
        await handle.close()

    async def handle_user_text(self, text: str) -> None:
        if self._strict and self._busy:
            await send_error(self._writer, messages.RESPONSE_IN_PROGRESS)
            return

        try:
            handle = await self._acquire()
        except UpstreamUnavailableError as exc:
            logger.warning("realtime connect failed: %s", exc)
            await send_error(self._writer, messages.UPSTREAM_CONNECT_FAILED)
            return
        except ConfigRejectedError as exc:
            logger.warning("realtime configure failed: %s", exc)
            await send_error(self._writer, messages.UPSTREAM_CONFIGURE_FAILED)
            return

        try:
            await handle.send_user_text(text)
        except SendFailedError as exc:
            logger.warning("realtime send failed: %s", exc)
            await self._invalidate(handle, "send_failed")
            await send_error(self._writer, messages.UPSTREAM_SEND_FAILED)
            return

        try:
            await handle.request_response()
        except SendFailedError as exc:
            logger.warning("realtime response request failed: %s", exc)
            await self._invalidate(handle, "response_request_failed")
            await send_error(self._writer, messages.UPSTREAM_RESPONSE_FAILED)
            return

        self._busy = True
        logger.info("realtime: forwarded message (%d chars)", len(text))

    async def _pump(self, handle: RealtimeConnection) -> None:
        """Forward events from ``handle`` to the browser until it ends."""
        try:
            while not self._done.fired:
                event = await handle.read_event()
                if isinstance(event, UpstreamErrorEvent):
                    logger.warning("realtime upstream error event: %s", event.detail)
                    continue
                if isinstance(event, Unrecognized):
                    logger.debug("realtime: ignoring event %s", event.event_type)
                    continue
                if isinstance(event, ResponseDone):
                    self._busy = False
                frame = to_frame(event)
                if frame is not None and not await self._writer.send_json(frame):
                    return
        except StreamEndedError as exc:
            logger.info("realtime stream ended, reconnecting on next message: %s", exc)
            await self._invalidate(handle, "stream_ended")
        except Exception as exc:  # noqa: BLE001
            logger.exception("realtime event pump failed")
            capture_error(exc)
            await self._invalidate(handle, "pump_error")

    async def close(self) -> None:
        """Stop the pump and close the handle. Idempotent."""
        await cancel_task(self._pump_task)
        self._pump_task = None
        async with self._lock:
            handle = self._handle
            self._handle = None
            self._state = HandleState.EMPTY
        if handle is not None:
            await handle.close()


__all__ = ["HandleState", "RealtimeDispatcher"]
