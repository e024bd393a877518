"""Dispatcher protocol shared by both upstream backends."""

from __future__ import annotations

from typing import Protocol


class SessionDispatcher(Protocol):
    """Forwards validated user text upstream and streams results back.

    ``handle_user_text`` is awaited by the session's reader task and never
    raises for upstream failures; those become error frames or silent
    reconnects according to the backend's policy.
    """

    @property
    def busy(self) -> bool: ...

    async def handle_user_text(self, text: str) -> None: ...

    async def close(self) -> None: ...


__all__ = ["SessionDispatcher"]
