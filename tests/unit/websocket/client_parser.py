"""Unit tests for client frame parsing."""

from __future__ import annotations

import pytest

from relay.handlers.websocket.parser import parse_client_message


def test_message_frame() -> None:
    msg = parse_client_message('{"type": "message", "message": "hi"}')

    assert msg.type == "message"
    assert msg.message == "hi"


def test_type_is_normalized_and_defaults_empty() -> None:
    assert parse_client_message('{"type": " PING "}').type == "ping"
    assert parse_client_message('{"message": "x"}').type == ""


def test_binary_json_is_accepted() -> None:
    assert parse_client_message(b'{"type": "pong"}').type == "pong"


@pytest.mark.parametrize("raw", ["not json", "[1, 2]", '"string"'])
def test_non_object_frames_raise(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_client_message(raw)
