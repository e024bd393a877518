"""Unit tests for the inactivity deadline and keepalive pings."""

from __future__ import annotations

import asyncio

from fastapi import WebSocketDisconnect

from relay.handlers.session.done import DoneSignal
from relay.handlers.websocket.writer import SessionWriter
from relay.handlers.websocket.lifecycle import SessionLifecycle
from tests.helpers.fake_socket import FakeWebSocket, wait_until


def _lifecycle(ws: FakeWebSocket, done: DoneSignal, clock: list[float], **kwargs) -> SessionLifecycle:
    return SessionLifecycle(ws, SessionWriter(ws, done), done, tick_s=0.01, now_fn=lambda: clock[0], **kwargs)


def test_idle_deadline_closes_with_idle_code() -> None:
    ws = FakeWebSocket()
    done = DoneSignal()
    clock = [0.0]
    lifecycle = _lifecycle(ws, done, clock, timeout_s=600, ping_interval_s=0)

    async def _run() -> None:
        lifecycle.start()
        clock[0] = 601.0
        await wait_until(lambda: done.fired)
        await lifecycle.stop()

    asyncio.run(_run())

    assert done.reason == "idle_timeout"
    assert ws.close_calls == [(4000, "idle_timeout")]


def test_touch_pushes_deadline_forward() -> None:
    ws = FakeWebSocket()
    done = DoneSignal()
    clock = [0.0]
    lifecycle = _lifecycle(ws, done, clock, timeout_s=10, ping_interval_s=0)

    async def _run() -> None:
        lifecycle.start()
        clock[0] = 9.0
        lifecycle.touch()
        clock[0] = 15.0
        await asyncio.sleep(0.05)
        assert not done.fired
        await lifecycle.stop()

    asyncio.run(_run())


def test_pings_are_sent_on_interval() -> None:
    ws = FakeWebSocket()
    done = DoneSignal()
    clock = [0.0]
    lifecycle = _lifecycle(ws, done, clock, timeout_s=600, ping_interval_s=60)

    async def _run() -> None:
        lifecycle.start()
        clock[0] = 61.0
        await wait_until(lambda: lifecycle.pings_sent == 1)
        await lifecycle.stop()

    asyncio.run(_run())

    assert ws.frames() == [{"type": "ping"}]


def test_failed_ping_ends_session() -> None:
    ws = FakeWebSocket()
    ws.send_error = WebSocketDisconnect(code=1006)
    done = DoneSignal()
    clock = [0.0]
    lifecycle = _lifecycle(ws, done, clock, timeout_s=600, ping_interval_s=60)

    async def _run() -> None:
        lifecycle.start()
        clock[0] = 61.0
        await wait_until(lambda: done.fired)
        await lifecycle.stop()

    asyncio.run(_run())

    assert done.reason in {"write_failed", "keepalive_failed"}
    assert ws.close_calls == []


def test_stop_is_prompt_after_done() -> None:
    ws = FakeWebSocket()
    done = DoneSignal()
    lifecycle = SessionLifecycle(ws, SessionWriter(ws, done), done, tick_s=30)

    async def _run() -> None:
        task = lifecycle.start()
        done.fire("client_closed")
        await asyncio.wait_for(task, timeout=1.0)

    asyncio.run(_run())
