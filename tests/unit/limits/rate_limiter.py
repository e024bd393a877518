"""Unit tests for the per-session token bucket."""

from __future__ import annotations

import pytest

from relay.errors import RateLimitError
from relay.handlers.limits import TokenBucketRateLimiter


def _limiter(clock: list[float], **kwargs) -> TokenBucketRateLimiter:
    return TokenBucketRateLimiter(now_fn=lambda: clock[0], **kwargs)


def test_burst_then_rejection() -> None:
    clock = [0.0]
    limiter = _limiter(clock, interval_seconds=5.0, burst=3)

    for _ in range(3):
        limiter.consume()
    clock[0] = 0.9
    with pytest.raises(RateLimitError) as exc_info:
        limiter.consume()

    err = exc_info.value
    assert err.limit == 3
    assert err.interval_seconds == 5.0
    assert err.retry_in == pytest.approx(5.0 - 0.9)


def test_refills_one_token_per_interval() -> None:
    clock = [0.0]
    limiter = _limiter(clock, interval_seconds=5.0, burst=3)
    for _ in range(3):
        limiter.consume()

    clock[0] = 5.0
    limiter.consume()
    with pytest.raises(RateLimitError):
        limiter.consume()


def test_refill_is_capped_at_burst() -> None:
    clock = [0.0]
    limiter = _limiter(clock, interval_seconds=1.0, burst=2)

    clock[0] = 1000.0
    assert limiter.tokens == 2.0
    limiter.consume()
    limiter.consume()
    with pytest.raises(RateLimitError):
        limiter.consume()


def test_zero_burst_disables_limiting() -> None:
    limiter = TokenBucketRateLimiter(interval_seconds=5.0, burst=0)

    for _ in range(50):
        limiter.consume()
    assert limiter.tokens == 0.0


def test_rejected_attempts_do_not_consume() -> None:
    clock = [0.0]
    limiter = _limiter(clock, interval_seconds=5.0, burst=1)
    limiter.consume()

    for _ in range(5):
        with pytest.raises(RateLimitError):
            limiter.consume()
    clock[0] = 5.0
    limiter.consume()
