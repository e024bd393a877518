"""Rate limiting exception with retry metadata."""


class RateLimitError(Exception):
    """Raised when a session's token bucket has no token available.

    Attributes:
        retry_in: Seconds until the next token is added to the bucket.
        limit: Bucket capacity (burst).
        interval_seconds: Seconds between two token refills.
    """

    def __init__(
        self,
        *,
        retry_in: float,
        limit: int,
        interval_seconds: float,
        message: str | None = None,
    ) -> None:
        super().__init__(message or "rate limit exceeded")
        self.retry_in = max(0.0, float(retry_in))
        self.limit = max(0, int(limit))
        self.interval_seconds = max(0.0, float(interval_seconds))


__all__ = ["RateLimitError"]
