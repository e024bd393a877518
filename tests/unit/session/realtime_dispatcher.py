"""Unit tests for the realtime dispatcher (lazy connect, reconnect, event pump)."""

from __future__ import annotations

import asyncio

from relay.config import messages
from relay.handlers.session.done import DoneSignal
from relay.handlers.websocket.writer import SessionWriter
from relay.handlers.session.realtime import HandleState, RealtimeDispatcher
from relay.upstream.events import AudioDelta, ResponseDone, TextDelta, TextDone, Unrecognized, UpstreamErrorEvent
from tests.helpers.fake_socket import FakeWebSocket, wait_until, wait_for_frames
from tests.helpers.fake_upstream import FakeRealtimeClient, FakeRealtimeConnection


def _dispatcher(client: FakeRealtimeClient, ws: FakeWebSocket, **kwargs) -> RealtimeDispatcher:
    done = DoneSignal()
    return RealtimeDispatcher(
        client,
        model="gpt-realtime-mini",
        system_prompt="persona",
        writer=SessionWriter(ws, done),
        done=done,
        **kwargs,
    )


def test_connects_lazily_on_first_message() -> None:
    client = FakeRealtimeClient()
    ws = FakeWebSocket()

    async def _run() -> RealtimeDispatcher:
        dispatcher = _dispatcher(client, ws)
        assert client.attempts == 0
        await dispatcher.handle_user_text("hello")
        await dispatcher.close()
        return dispatcher

    asyncio.run(_run())

    conn = client.connections[0]
    assert client.models == ["gpt-realtime-mini"]
    assert conn.configured_with == "persona"
    assert conn.texts == ["hello"]
    assert conn.responses_requested == 1


def test_handle_is_reused_between_messages() -> None:
    client = FakeRealtimeClient()
    ws = FakeWebSocket()

    async def _run() -> None:
        dispatcher = _dispatcher(client, ws)
        await dispatcher.handle_user_text("one")
        await dispatcher.handle_user_text("two")
        await dispatcher.close()

    asyncio.run(_run())

    assert client.attempts == 1
    assert client.connections[0].texts == ["one", "two"]


def test_connect_failure_then_fresh_attempt() -> None:
    client = FakeRealtimeClient(failures=1)
    ws = FakeWebSocket()

    async def _run() -> list[HandleState]:
        dispatcher = _dispatcher(client, ws)
        await dispatcher.handle_user_text("first")
        after_failure = dispatcher.state
        await dispatcher.handle_user_text("second")
        after_retry = dispatcher.state
        await dispatcher.close()
        return [after_failure, after_retry]

    states = asyncio.run(_run())

    assert ws.frames() == [{"type": "error", "error": messages.UPSTREAM_CONNECT_FAILED}]
    assert client.attempts == 2
    assert states == [HandleState.FAILED, HandleState.OPEN]
    assert client.connections[0].texts == ["second"]


def test_configure_failure_closes_handle_and_reports() -> None:
    client = FakeRealtimeClient(connection_factory=lambda: FakeRealtimeConnection(fail_configure=True))
    ws = FakeWebSocket()

    async def _run() -> None:
        dispatcher = _dispatcher(client, ws)
        await dispatcher.handle_user_text("hi")
        await dispatcher.close()

    asyncio.run(_run())

    assert ws.frames() == [{"type": "error", "error": messages.UPSTREAM_CONFIGURE_FAILED}]
    assert client.connections[0].closed


def test_send_failure_invalidates_handle() -> None:
    client = FakeRealtimeClient(connection_factory=lambda: FakeRealtimeConnection(fail_send=True))
    ws = FakeWebSocket()

    async def _run() -> RealtimeDispatcher:
        dispatcher = _dispatcher(client, ws)
        await dispatcher.handle_user_text("hi")
        state = dispatcher.state
        await dispatcher.close()
        return state

    state = asyncio.run(_run())

    assert state is HandleState.FAILED
    assert ws.frames() == [{"type": "error", "error": messages.UPSTREAM_SEND_FAILED}]
    assert client.connections[0].closed


def test_events_are_forwarded_in_order() -> None:
    client = FakeRealtimeClient()
    ws = FakeWebSocket()

    async def _run() -> bool:
        dispatcher = _dispatcher(client, ws)
        await dispatcher.handle_user_text("hi")
        assert dispatcher.busy
        client.connections[0].push(
            TextDelta(text="Hel"),
            Unrecognized(event_type="rate_limits.updated"),
            UpstreamErrorEvent(detail="transient"),
            TextDelta(text="lo"),
            AudioDelta(audio="AAAA"),
            TextDone(),
            ResponseDone(),
        )
        await wait_for_frames(ws, 5)
        busy = dispatcher.busy
        await dispatcher.close()
        return busy

    busy = asyncio.run(_run())

    assert ws.frames() == [
        {"type": "text_delta", "text": "Hel"},
        {"type": "text_delta", "text": "lo"},
        {"type": "audio_delta", "audio": "AAAA"},
        {"type": "text_done"},
        {"type": "response_done"},
    ]
    assert busy is False


def test_stream_end_is_silent_and_next_message_reconnects() -> None:
    client = FakeRealtimeClient()
    ws = FakeWebSocket()

    async def _run() -> None:
        dispatcher = _dispatcher(client, ws)
        await dispatcher.handle_user_text("one")
        client.connections[0].end_stream()
        await wait_until(lambda: dispatcher.state is HandleState.FAILED)
        await dispatcher.handle_user_text("two")
        await dispatcher.close()

    asyncio.run(_run())

    assert ws.sent == []
    assert client.attempts == 2
    assert client.connections[0].closed
    assert client.connections[1].texts == ["two"]


def test_strict_single_flight_rejects_overlap() -> None:
    client = FakeRealtimeClient()
    ws = FakeWebSocket()

    async def _run() -> None:
        dispatcher = _dispatcher(client, ws, strict_single_flight=True)
        await dispatcher.handle_user_text("one")
        await dispatcher.handle_user_text("two")
        await dispatcher.close()

    asyncio.run(_run())

    assert ws.frames() == [{"type": "error", "error": messages.RESPONSE_IN_PROGRESS}]
    assert client.connections[0].texts == ["one"]


def test_concurrent_messages_open_one_handle() -> None:
    client = FakeRealtimeClient()
    ws = FakeWebSocket()

    async def _run() -> None:
        dispatcher = _dispatcher(client, ws)
        await asyncio.gather(dispatcher.handle_user_text("a"), dispatcher.handle_user_text("b"))
        await dispatcher.close()

    asyncio.run(_run())

    assert client.attempts == 1
    assert sorted(client.connections[0].texts) == ["a", "b"]


def test_close_releases_handle() -> None:
    client = FakeRealtimeClient()
    ws = FakeWebSocket()

    async def _run() -> RealtimeDispatcher:
        dispatcher = _dispatcher(client, ws)
        await dispatcher.handle_user_text("hi")
        await dispatcher.close()
        await dispatcher.close()
        return dispatcher

    dispatcher = asyncio.run(_run())

    assert client.connections[0].closed
    assert dispatcher.state is HandleState.EMPTY
