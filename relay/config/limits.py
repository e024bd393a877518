"""Message, rate and admission limits configuration."""

import os

from ..helpers.env import env_flag


# Message validation bounds (characters, after JSON decoding)
MIN_MESSAGE_LENGTH = int(os.getenv("MIN_MESSAGE_LENGTH", "1"))
MAX_MESSAGE_LENGTH = int(os.getenv("MAX_MESSAGE_LENGTH", "4000"))

# Per-connection token bucket: one token every interval, up to burst
MESSAGE_RATE_INTERVAL_S = float(os.getenv("MESSAGE_RATE_INTERVAL_S", "5"))
MESSAGE_BURST = int(os.getenv("MESSAGE_BURST", "3"))

# Concurrent WebSocket connections allowed per source address
MAX_CONNECTIONS_PER_IP = int(os.getenv("MAX_CONNECTIONS_PER_IP", "10"))

# Reject a new message while a realtime response is still streaming
STRICT_SINGLE_FLIGHT = env_flag("STRICT_SINGLE_FLIGHT", False)


__all__ = [
    "MIN_MESSAGE_LENGTH",
    "MAX_MESSAGE_LENGTH",
    "MESSAGE_RATE_INTERVAL_S",
    "MESSAGE_BURST",
    "MAX_CONNECTIONS_PER_IP",
    "STRICT_SINGLE_FLIGHT",
]
