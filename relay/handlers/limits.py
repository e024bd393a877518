"""Token-bucket rate limiter for per-session message throttling.

Each session owns one bucket. The bucket starts full (``burst`` tokens) and
regains one token every ``interval_seconds`` up to ``burst``. A message is
processed only if a token is available when it arrives; otherwise it is
dropped and the client is told to slow down.

Example:
    # One message every 5 seconds, bursts of up to 3
    limiter = TokenBucketRateLimiter(interval_seconds=5, burst=3)

    try:
        limiter.consume()
    except RateLimitError as e:
        print(f"Rate limited, retry in {e.retry_in:.1f}s")
"""

from __future__ import annotations

import time
from collections.abc import Callable

from ..errors import RateLimitError
from ..config import MESSAGE_BURST, MESSAGE_RATE_INTERVAL_S

# Type alias for injectable time functions (used in testing)
TimeFn = Callable[[], float]


class TokenBucketRateLimiter:
    """Refilling token bucket.

    The limiter is disabled when ``burst`` or ``interval_seconds`` is 0, in
    which case consume() always succeeds. Not thread-safe; a bucket belongs
    to exactly one session's reader task.

    Attributes:
        interval_seconds: Seconds per refilled token.
        burst: Bucket capacity.
    """

    def __init__(
        self,
        *,
        interval_seconds: float = MESSAGE_RATE_INTERVAL_S,
        burst: int = MESSAGE_BURST,
        now_fn: TimeFn | None = None,
    ) -> None:
        self.interval_seconds = max(0.0, float(interval_seconds))
        self.burst = max(0, int(burst))
        self._now = now_fn or time.monotonic
        self._tokens = float(self.burst)
        self._updated = self._now()
        self._enabled = self.burst > 0 and self.interval_seconds > 0

    @property
    def tokens(self) -> float:
        if self._enabled:
            self._refill(self._now())
        return self._tokens

    def _refill(self, now: float) -> None:
        elapsed = max(0.0, now - self._updated)
        self._updated = now
        self._tokens = min(float(self.burst), self._tokens + elapsed / self.interval_seconds)

    def consume(self) -> None:
        """Take one token or raise RateLimitError if the bucket is empty.

        Raises:
            RateLimitError: No token is available.
        """
        if not self._enabled:
            return

        self._refill(self._now())
        if self._tokens < 1.0:
            retry_in = (1.0 - self._tokens) * self.interval_seconds
            raise RateLimitError(
                retry_in=retry_in,
                limit=self.burst,
                interval_seconds=self.interval_seconds,
            )
        self._tokens -= 1.0


__all__ = ["RateLimitError", "TokenBucketRateLimiter"]
