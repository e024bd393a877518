"""Unit tests for the Turnstile siteverify client."""

from __future__ import annotations

import asyncio

import httpx
import orjson
import pytest

from relay.auth import TurnstileVerifier
from relay.errors import VerificationError

VERIFY_URL = "https://verify.test/siteverify"


def _verifier(handler) -> tuple[TurnstileVerifier, list[dict]]:
    seen: list[dict] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(orjson.loads(request.content))
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
    return TurnstileVerifier("secret-key", verify_url=VERIFY_URL, http_client=client), seen


def test_affirmed_challenge() -> None:
    verifier, seen = _verifier(lambda _req: httpx.Response(200, json={"success": True}))

    assert asyncio.run(verifier.verify("resp-token", "192.0.2.1")) is True
    assert seen == [{"secret": "secret-key", "response": "resp-token", "remoteip": "192.0.2.1"}]


def test_negative_answer_returns_false() -> None:
    verifier, _ = _verifier(
        lambda _req: httpx.Response(200, json={"success": False, "error-codes": ["invalid-input-response"]})
    )

    assert asyncio.run(verifier.verify("resp-token", "192.0.2.1")) is False


def test_transport_failure_is_unavailable() -> None:
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    verifier, _ = _verifier(_boom)

    with pytest.raises(VerificationError) as exc_info:
        asyncio.run(verifier.verify("resp-token", "192.0.2.1"))
    assert exc_info.value.reason == "unavailable"


def test_non_json_answer_is_unavailable() -> None:
    verifier, _ = _verifier(lambda _req: httpx.Response(502, content=b"<html>bad gateway</html>"))

    with pytest.raises(VerificationError) as exc_info:
        asyncio.run(verifier.verify("resp-token", "192.0.2.1"))
    assert exc_info.value.reason == "unavailable"


def test_without_secret_every_challenge_passes() -> None:
    verifier = TurnstileVerifier("")

    assert not verifier.enabled
    assert asyncio.run(verifier.verify("anything", "192.0.2.1")) is True
