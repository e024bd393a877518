"""Exception classification helpers for log and error-report labels."""

from __future__ import annotations

from .limits import RateLimitError
from .validation import ValidationError
from .audio import MalformedContainerError
from .auth import AuthenticationError, VerificationError
from .upstream import (
    BadStatusError,
    SendFailedError,
    StreamEndedError,
    ConfigRejectedError,
    UpstreamUnavailableError,
)

ERROR_CATEGORIES: tuple[tuple[type[BaseException], str], ...] = (
    (ValidationError, "validation"),
    (RateLimitError, "rate_limit"),
    (VerificationError, "verification"),
    (AuthenticationError, "auth"),
    (MalformedContainerError, "audio"),
    (UpstreamUnavailableError, "upstream_unavailable"),
    (BadStatusError, "upstream_status"),
    (ConfigRejectedError, "upstream_config"),
    (SendFailedError, "upstream_send"),
    (StreamEndedError, "upstream_stream"),
    (TimeoutError, "timeout"),
    (ConnectionError, "connection"),
)


def classify_error(exc: BaseException) -> str:
    """Map an exception to a coarse category label."""

    for cls, label in ERROR_CATEGORIES:
        if isinstance(exc, cls):
            return label
    return "unknown"


__all__ = ["ERROR_CATEGORIES", "classify_error"]
