"""Single-fire shutdown signal shared by all tasks of one session."""

from __future__ import annotations

import asyncio
import logging
import threading

logger = logging.getLogger(__name__)


class DoneSignal:
    """Latch that fires at most once and can be awaited by many tasks.

    Any number of shutdown sources (browser close, read error, keepalive
    failure, idle timeout) may call ``fire``; only the first call has an
    effect and its reason is kept.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._lock = threading.Lock()
        self._reason: str | None = None

    @property
    def fired(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> str | None:
        return self._reason

    def fire(self, reason: str) -> bool:
        """Fire the signal. Returns True only for the call that fired it."""
        with self._lock:
            if self._reason is not None:
                return False
            self._reason = reason
        self._event.set()
        logger.debug("session done: %s", reason)
        return True

    async def wait(self) -> str:
        await self._event.wait()
        return self._reason or ""


__all__ = ["DoneSignal"]
