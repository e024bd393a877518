"""Unit tests for websocket error frames and upgrade rejection."""

from __future__ import annotations

import asyncio

import orjson

from relay.handlers.session.done import DoneSignal
from relay.handlers.websocket.writer import SessionWriter
from relay.handlers.websocket.errors import send_error, reject_connection
from tests.helpers.fake_socket import FakeWebSocket


def test_send_error_frame_shape() -> None:
    ws = FakeWebSocket()
    writer = SessionWriter(ws, DoneSignal())

    assert asyncio.run(send_error(writer, "Rate limit exceeded")) is True
    assert ws.frames() == [{"type": "error", "error": "Rate limit exceeded"}]


def test_reject_connection_sends_denial_response() -> None:
    ws = FakeWebSocket()

    asyncio.run(reject_connection(ws, status_code=401, message="Authentication required", close_code=1008))

    response = ws.denials[0]
    assert response.status_code == 401
    assert orjson.loads(response.body) == {"error": "Authentication required"}
    assert ws.close_calls == []


def test_reject_connection_falls_back_to_close_code() -> None:
    class _NoDenial(FakeWebSocket):
        async def send_denial_response(self, response) -> None:
            raise RuntimeError("The server doesn't support the Websocket Denial Response extension.")

    ws = _NoDenial()

    asyncio.run(reject_connection(ws, status_code=429, message="Too many", close_code=1013))

    assert ws.close_calls == [(1013, "Too many")]
