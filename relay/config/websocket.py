"""WebSocket-specific runtime configuration values.

Timeouts:
    WS_CONNECTION_TIMEOUT_S: Close a session after this many seconds without
        any inbound frame. Every frame the browser sends pushes the deadline
        forward.

    WS_PING_INTERVAL_S: How often the server sends a ``{"type": "ping"}``
        keepalive frame. A failed ping write ends the session.

    WS_WATCHDOG_TICK_S: How often the deadline watchdog wakes up.

    WS_SEND_TIMEOUT_S: Upper bound on a single outbound frame write.

Close Codes (RFC 6455):
    1000: Normal closure
    1008: Policy violation (auth or origin failure)
    1013: Try again later (too many connections)
    4000+: Application-defined (idle timeout)

Origins:
    ALLOWED_ORIGINS is shared by the CORS middleware and the WebSocket
    origin check. Requests without an Origin header are not checked.
"""

from __future__ import annotations

import os

from ..helpers.env import env_list

# ============================================================================
# Timeout Configuration
# ============================================================================

WS_CONNECTION_TIMEOUT_S = float(os.getenv("WS_CONNECTION_TIMEOUT_S", "600"))  # 10 minutes
WS_PING_INTERVAL_S = float(os.getenv("WS_PING_INTERVAL_S", "60"))
WS_WATCHDOG_TICK_S = float(os.getenv("WS_WATCHDOG_TICK_S", "5"))
WS_SEND_TIMEOUT_S = float(os.getenv("WS_SEND_TIMEOUT_S", "10"))

# ============================================================================
# WebSocket Close Codes
# ============================================================================

WS_CLOSE_NORMAL_CODE = int(os.getenv("WS_CLOSE_NORMAL_CODE", "1000"))
WS_CLOSE_UNAUTHORIZED_CODE = int(os.getenv("WS_CLOSE_UNAUTHORIZED_CODE", "1008"))  # Policy violation
WS_CLOSE_BUSY_CODE = int(os.getenv("WS_CLOSE_BUSY_CODE", "1013"))  # Try again later
WS_CLOSE_IDLE_CODE = int(os.getenv("WS_CLOSE_IDLE_CODE", "4000"))
WS_CLOSE_IDLE_REASON = os.getenv("WS_CLOSE_IDLE_REASON", "idle_timeout")

# ============================================================================
# Origins
# ============================================================================

ALLOWED_ORIGINS = env_list(
    "ALLOWED_ORIGINS",
    (
        "http://localhost:5173",
        "http://localhost:3000",
        "https://christianmoore.me",
        "https://resume.k3s.christianmoore.me",
    ),
)

__all__ = [
    "WS_CONNECTION_TIMEOUT_S",
    "WS_PING_INTERVAL_S",
    "WS_WATCHDOG_TICK_S",
    "WS_SEND_TIMEOUT_S",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_UNAUTHORIZED_CODE",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "ALLOWED_ORIGINS",
]
