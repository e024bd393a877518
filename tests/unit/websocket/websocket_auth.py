"""Unit tests for websocket credential extraction and validation."""

from __future__ import annotations

from relay.auth import TokenIssuer
from relay.handlers.websocket.auth import extract_bearer_token, authenticate_websocket
from tests.helpers.fake_socket import FakeWebSocket


def test_authorization_header_wins_over_subprotocol() -> None:
    ws = FakeWebSocket(headers={"Authorization": "Bearer header-token"}, subprotocols=["proto-token"])

    credential = extract_bearer_token(ws)

    assert credential.token == "header-token"
    assert credential.subprotocol is None


def test_bearer_prefix_is_case_insensitive() -> None:
    ws = FakeWebSocket(headers={"Authorization": "bearer abc"})

    assert extract_bearer_token(ws).token == "abc"


def test_subprotocol_fallback_is_echoed() -> None:
    ws = FakeWebSocket(subprotocols=["proto-token"])

    credential = extract_bearer_token(ws)

    assert credential.token == "proto-token"
    assert credential.subprotocol == "proto-token"


def test_missing_credential_is_empty() -> None:
    assert extract_bearer_token(FakeWebSocket()).token == ""


def test_open_mode_accepts_missing_credential() -> None:
    assert authenticate_websocket(FakeWebSocket(), TokenIssuer("")) is not None


def test_signed_credential_accepted() -> None:
    issuer = TokenIssuer("s3cret")
    ws = FakeWebSocket(headers={"Authorization": f"Bearer {issuer.issue()}"})

    assert authenticate_websocket(ws, issuer) is not None


def test_bad_credential_rejected() -> None:
    ws = FakeWebSocket(headers={"Authorization": "Bearer dev-token"})

    assert authenticate_websocket(ws, TokenIssuer("s3cret")) is None
