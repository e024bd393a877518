"""Local pipeline dispatcher.

Each user message runs one complete exchange (completion then speech) in
the session's reader task, so a session never has two exchanges in flight.
The exchange is raced against the session's done signal; when the browser
goes away the in-flight HTTP request is cancelled rather than left to run
to its own timeout.

Any stage failure is reported to the browser as one generic error frame.
"""

from __future__ import annotations

import asyncio
import logging

from .done import DoneSignal
from ...config import messages
from ...telemetry import capture_error
from ...helpers.tasks import cancel_task
from ...errors import UpstreamError, MalformedContainerError, classify_error
from ...upstream.events import to_frame
from ...upstream.local import LocalPipelineClient
from ..websocket.errors import send_error
from ..websocket.writer import SessionWriter

logger = logging.getLogger(__name__)


class LocalPipelineDispatcher:
    def __init__(
        self,
        client: LocalPipelineClient,
        *,
        system_prompt: str,
        writer: SessionWriter,
        done: DoneSignal,
    ) -> None:
        self._client = client
        self._system_prompt = system_prompt
        self._writer = writer
        self._done = done
        self._busy = False
        self.exchanges = 0

    @property
    def busy(self) -> bool:
        return self._busy

    async def handle_user_text(self, text: str) -> None:
        self._busy = True
        self.exchanges += 1
        exchange = asyncio.create_task(self._run_exchange(text), name="local-exchange")
        done_wait = asyncio.create_task(self._done.wait(), name="local-exchange-done")
        try:
            await asyncio.wait({exchange, done_wait}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            await cancel_task(done_wait)
            if not exchange.done():
                logger.info("session ended mid-exchange; cancelling upstream requests")
            await cancel_task(exchange)
            self._busy = False

    async def _run_exchange(self, text: str) -> None:
        try:
            async for event in self._client.run_exchange(self._system_prompt, text):
                frame = to_frame(event)
                if frame is None:
                    continue
                if not await self._writer.send_json(frame):
                    return
        except (UpstreamError, MalformedContainerError) as exc:
            logger.warning("local pipeline exchange failed (%s): %s", classify_error(exc), exc)
            await send_error(self._writer, messages.GENERATION_FAILED)
        except Exception as exc:  # noqa: BLE001
            logger.exception("local pipeline exchange crashed")
            capture_error(exc)
            await send_error(self._writer, messages.GENERATION_FAILED)

    async def close(self) -> None:
        """Nothing persistent to release; the HTTP client is process-wide."""
        return None


__all__ = ["LocalPipelineDispatcher"]
