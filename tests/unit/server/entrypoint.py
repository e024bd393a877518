"""Unit tests for the ``python -m relay`` entry point."""

from __future__ import annotations

from typing import Any

import pytest

import relay.__main__ as entrypoint
from relay.config import HOST, PORT


def test_main_serves_without_websocket_compression(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[Any, dict[str, Any]]] = []
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    entrypoint.main()

    (app, kwargs), = calls
    assert app is entrypoint.app
    assert kwargs["ws_per_message_deflate"] is False
    assert (kwargs["host"], kwargs["port"]) == (HOST, PORT)
    assert kwargs["log_config"] is None
