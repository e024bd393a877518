"""WebSocket handling for ``/ws/chat``.

- manager.py: connection entry point (origin, auth, admission, cleanup)
- message_loop.py: single reader loop and message routing
- lifecycle.py: inactivity deadline and keepalive pings
- writer.py: serialized outbound frames
- auth.py: bearer credential extraction and validation
- parser.py: client frame parsing
- errors.py: error frames and upgrade rejection
- disconnects.py: expected-teardown classification
"""
