"""Error reporting for the relay.

Sentry is only initialized when ``SENTRY_DSN`` is set; every helper here is a
no-op otherwise.
"""

from .sentry import init_sentry, capture_error, shutdown_sentry

__all__ = ["init_sentry", "shutdown_sentry", "capture_error"]
