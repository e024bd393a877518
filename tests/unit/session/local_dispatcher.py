"""Unit tests for the local pipeline dispatcher."""

from __future__ import annotations

import asyncio

import httpx

from relay.config import messages
from relay.upstream.local import LocalPipelineClient
from relay.handlers.session.done import DoneSignal
from relay.handlers.websocket.writer import SessionWriter
from relay.handlers.session.local import LocalPipelineDispatcher
from tests.helpers.fake_socket import FakeWebSocket
from tests.helpers.fake_upstream import PipelineTransport, build_wav, sse_body


def _dispatcher(http_client: httpx.AsyncClient, ws: FakeWebSocket, done: DoneSignal | None = None) -> LocalPipelineDispatcher:
    done = done or DoneSignal()
    client = LocalPipelineClient(llm_url="http://llm.test", tts_url="http://tts.test", http_client=http_client)
    return LocalPipelineDispatcher(client, system_prompt="persona", writer=SessionWriter(ws, done), done=done)


def test_successful_exchange_frames() -> None:
    transport = PipelineTransport(completion=sse_body("Hi", "!"), wav=build_wav([1, 2, 3]))
    ws = FakeWebSocket()

    async def _run() -> LocalPipelineDispatcher:
        dispatcher = _dispatcher(transport.client(), ws)
        await dispatcher.handle_user_text("hello")
        return dispatcher

    dispatcher = asyncio.run(_run())

    assert ws.frame_types() == ["text_delta", "text_delta", "text_done", "audio_delta", "audio_done", "response_done"]
    assert dispatcher.exchanges == 1
    assert not dispatcher.busy


def test_upstream_status_error_is_one_generic_error_frame() -> None:
    transport = PipelineTransport(completion_status=500)
    ws = FakeWebSocket()

    async def _run() -> None:
        await _dispatcher(transport.client(), ws).handle_user_text("hello")

    asyncio.run(_run())

    assert ws.frames() == [{"type": "error", "error": messages.GENERATION_FAILED}]
    assert "overloaded" not in ws.sent[0]


def test_speech_failure_after_text_reports_error() -> None:
    transport = PipelineTransport(completion=sse_body("Hi"), speech_status=502)
    ws = FakeWebSocket()

    async def _run() -> None:
        await _dispatcher(transport.client(), ws).handle_user_text("hello")

    asyncio.run(_run())

    assert ws.frame_types() == ["text_delta", "text_done", "error"]


def test_bad_wav_reports_error() -> None:
    transport = PipelineTransport(completion=sse_body("Hi"), wav=b"garbage")
    ws = FakeWebSocket()

    async def _run() -> None:
        await _dispatcher(transport.client(), ws).handle_user_text("hello")

    asyncio.run(_run())

    assert ws.frames()[-1] == {"type": "error", "error": messages.GENERATION_FAILED}


def test_session_end_cancels_in_flight_exchange() -> None:
    started = asyncio.Event()
    ws = FakeWebSocket()

    async def _stall(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(30)
        return httpx.Response(200)

    async def _run() -> None:
        done = DoneSignal()
        dispatcher = _dispatcher(httpx.AsyncClient(transport=httpx.MockTransport(_stall)), ws, done)
        handler = asyncio.create_task(dispatcher.handle_user_text("hello"))
        await asyncio.wait_for(started.wait(), timeout=1.0)
        done.fire("client_closed")
        await asyncio.wait_for(handler, timeout=1.0)
        assert not dispatcher.busy

    asyncio.run(_run())

    assert ws.sent == []
