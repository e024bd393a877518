"""Per-session state owned by the WebSocket handler.

One ``SessionState`` exists per accepted browser socket. It is passed by
reference to the reader loop, the keepalive task and the upstream
dispatcher; nothing in it is shared with other sessions.
"""

from __future__ import annotations

import time
from dataclasses import field, dataclass
from typing import TYPE_CHECKING

from .done import DoneSignal
from ..limits import TokenBucketRateLimiter
from ..connections import AdmissionSlot

if TYPE_CHECKING:
    from .dispatch import SessionDispatcher
    from ..websocket.writer import SessionWriter


@dataclass(slots=True)
class SessionState:
    session_id: str
    client_address: str
    slot: AdmissionSlot
    limiter: TokenBucketRateLimiter
    done: DoneSignal
    writer: SessionWriter
    dispatcher: SessionDispatcher | None = None
    messages_received: int = 0
    messages_forwarded: int = 0
    started_at: float = field(default_factory=time.monotonic)

    def duration_s(self) -> float:
        return time.monotonic() - self.started_at


__all__ = ["SessionState"]
