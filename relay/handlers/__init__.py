"""WebSocket and session management handlers.

This package provides the infrastructure for handling browser connections:

connections.py:
    Per-address admission registry. Slots are released exactly once.

limits.py:
    Token-bucket rate limiter for per-session message throttling.

session/:
    Per-session state:
    - Single-fire done signal (done.py)
    - Owned session state (state.py)
    - Realtime and local pipeline dispatchers (realtime.py, local.py)

websocket/:
    WebSocket message routing and lifecycle:
    - Inactivity deadline and keepalive (lifecycle.py)
    - Frame parsing (parser.py)
    - Error frames and rejections (errors.py)
    - Serialized writer (writer.py)
    - Main connection handler (manager.py)
"""
