"""Unit tests for Sentry event scrubbing and report throttling."""

from __future__ import annotations

import pytest

import relay.telemetry.sentry as sentry
from relay.errors import RateLimitError
from relay.logging import log_context


@pytest.fixture
def reported(monkeypatch: pytest.MonkeyPatch) -> list[BaseException]:
    errors: list[BaseException] = []
    monkeypatch.setattr(sentry, "_enabled", True)
    monkeypatch.setattr(sentry, "_last_report", {})
    monkeypatch.setattr(sentry.sentry_sdk, "capture_exception", errors.append)
    return errors


def test_scrub_event_filters_credentials() -> None:
    event = {
        "request": {
            "headers": {
                "Authorization": "Bearer abc",
                "Sec-WebSocket-Protocol": "abc",
                "User-Agent": "browser",
            },
            "data": {"token": "challenge"},
        }
    }

    scrubbed = sentry._scrub_event(event, {})

    headers = scrubbed["request"]["headers"]
    assert headers["Authorization"] == "[Filtered]"
    assert headers["Sec-WebSocket-Protocol"] == "[Filtered]"
    assert headers["User-Agent"] == "browser"
    assert scrubbed["request"]["data"] == "[Filtered]"


def test_scrub_event_without_request_is_untouched() -> None:
    event = {"message": "boom"}
    assert sentry._scrub_event(event, {}) == {"message": "boom"}


def test_capture_is_noop_when_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[BaseException] = []
    monkeypatch.setattr(sentry, "_enabled", False)
    monkeypatch.setattr(sentry.sentry_sdk, "capture_exception", calls.append)

    sentry.capture_error(RuntimeError("boom"))

    assert calls == []


def test_repeated_errors_are_throttled(reported: list[BaseException]) -> None:
    with log_context(session_id="s1", client_id="198.51.100.2"):
        sentry.capture_error(RuntimeError("first"))
        sentry.capture_error(RuntimeError("second"))
    sentry.capture_error(RateLimitError(retry_in=1.0, limit=3, interval_seconds=5.0))

    assert [str(exc) for exc in reported[:1]] == ["first"]
    assert len(reported) == 2
