"""Realtime vendor backend."""

from .client import RealtimeClient, RealtimeConnection
from .protocol import parse_realtime_event, decode_realtime_message

__all__ = [
    "RealtimeClient",
    "RealtimeConnection",
    "parse_realtime_event",
    "decode_realtime_message",
]
