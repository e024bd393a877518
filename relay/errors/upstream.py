"""Upstream (realtime vendor or local pipeline) exceptions.

Messages on these exceptions are for logs only. Clients receive the generic
strings from ``relay.config.messages``.
"""


class UpstreamError(Exception):
    """Base class for failures talking to an upstream backend."""


class UpstreamUnavailableError(UpstreamError):
    """Raised when an upstream endpoint cannot be reached."""


class BadStatusError(UpstreamError):
    """Raised when an upstream HTTP endpoint answers with a non-200 status.

    Attributes:
        status: HTTP status code returned by the endpoint.
        body: Response body, truncated, for logging.
    """

    def __init__(self, status: int, body: str = "") -> None:
        super().__init__(f"upstream returned status {status}: {body}")
        self.status = status
        self.body = body


class ConfigRejectedError(UpstreamError):
    """Raised when the realtime session configuration cannot be applied."""


class SendFailedError(UpstreamError):
    """Raised when an event cannot be written to the realtime connection."""


class StreamEndedError(UpstreamError):
    """Raised when the realtime event stream closes or fails mid-read."""


__all__ = [
    "UpstreamError",
    "UpstreamUnavailableError",
    "BadStatusError",
    "ConfigRejectedError",
    "SendFailedError",
    "StreamEndedError",
]
