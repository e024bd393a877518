"""Unit tests for exception-to-label classification."""

from __future__ import annotations

from relay.errors import (
    SigningError,
    BadStatusError,
    RateLimitError,
    ValidationError,
    StreamEndedError,
    InvalidTokenError,
    VerificationError,
    UpstreamUnavailableError,
    UnsupportedAudioFormatError,
    classify_error,
)


def test_classify_error_known_categories() -> None:
    assert classify_error(ValidationError("message_empty", "empty")) == "validation"
    assert classify_error(RateLimitError(retry_in=1.0, limit=3, interval_seconds=5.0)) == "rate_limit"
    assert classify_error(VerificationError("rejected")) == "verification"
    assert classify_error(InvalidTokenError("expired")) == "auth"
    assert classify_error(SigningError("bad key")) == "auth"
    assert classify_error(UnsupportedAudioFormatError(8)) == "audio"
    assert classify_error(UpstreamUnavailableError("down")) == "upstream_unavailable"
    assert classify_error(BadStatusError(500, "oops")) == "upstream_status"
    assert classify_error(StreamEndedError("closed")) == "upstream_stream"
    assert classify_error(TimeoutError("deadline exceeded")) == "timeout"
    assert classify_error(ConnectionError("socket closed")) == "connection"


def test_classify_error_defaults_to_unknown() -> None:
    assert classify_error(RuntimeError("boom")) == "unknown"
