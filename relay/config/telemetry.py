"""Sentry reporting settings."""

import os

from ..helpers.env import env_float

SENTRY_DSN: str = os.getenv("SENTRY_DSN", "")
SENTRY_ENVIRONMENT: str = os.getenv("SENTRY_ENVIRONMENT", os.getenv("APP_ENV", "development"))
SENTRY_RELEASE: str = os.getenv("SENTRY_RELEASE", "")
SENTRY_SAMPLE_RATE: float = env_float("SENTRY_SAMPLE_RATE", 1.0)

# Minimum seconds between two reports of the same error category and class
SENTRY_RATE_LIMIT_S: float = env_float("SENTRY_RATE_LIMIT_S", 10.0)

# Lower-cased; these can carry a bearer credential or session cookie
SENTRY_SCRUBBED_HEADERS = frozenset({"authorization", "sec-websocket-protocol", "cookie"})


__all__ = [
    "SENTRY_DSN",
    "SENTRY_ENVIRONMENT",
    "SENTRY_RELEASE",
    "SENTRY_SAMPLE_RATE",
    "SENTRY_RATE_LIMIT_S",
    "SENTRY_SCRUBBED_HEADERS",
]
