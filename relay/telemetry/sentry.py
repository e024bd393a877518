"""Sentry error reporting for relay sessions.

Reports are tagged with the session's correlation fields, the error
category from ``classify_error`` and the active upstream backend. Bearer
credentials travel in request headers, the WebSocket subprotocol and the
Turnstile body, so those are scrubbed from every event before it leaves
the process. Repeats of one (category, class) pair are throttled.
"""

from __future__ import annotations

import time
import logging
from typing import Any

import sentry_sdk

from ..errors import classify_error
from ..logging import current_log_context
from ..config.telemetry import (
    SENTRY_DSN,
    SENTRY_RELEASE,
    SENTRY_ENVIRONMENT,
    SENTRY_SAMPLE_RATE,
    SENTRY_RATE_LIMIT_S,
    SENTRY_SCRUBBED_HEADERS,
)

logger = logging.getLogger(__name__)

_FILTERED = "[Filtered]"
_last_report: dict[tuple[str, str], float] = {}
_enabled = False


def _scrub_event(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any]:
    request = event.get("request")
    if not isinstance(request, dict):
        return event
    headers = request.get("headers")
    if isinstance(headers, dict):
        for name in list(headers):
            if name.lower() in SENTRY_SCRUBBED_HEADERS:
                headers[name] = _FILTERED
    if request.get("data"):
        request["data"] = _FILTERED
    return event


def init_sentry(*, backend: str | None = None) -> bool:
    """Start the SDK when ``SENTRY_DSN`` is set. Returns whether reporting is on."""
    global _enabled  # noqa: PLW0603
    if _enabled:
        return True
    if not SENTRY_DSN:
        logger.debug("Sentry disabled: SENTRY_DSN not set")
        return False

    options: dict[str, Any] = {
        "dsn": SENTRY_DSN,
        "environment": SENTRY_ENVIRONMENT,
        "sample_rate": SENTRY_SAMPLE_RATE,
        "traces_sample_rate": 0.0,
        "send_default_pii": False,
        "before_send": _scrub_event,
    }
    if SENTRY_RELEASE:
        options["release"] = SENTRY_RELEASE

    sentry_sdk.init(**options)
    if backend:
        sentry_sdk.set_tag("upstream.backend", backend)
    _enabled = True
    logger.info("Sentry initialized: environment=%s backend=%s", SENTRY_ENVIRONMENT, backend or "-")
    return True


def shutdown_sentry() -> None:
    """Flush pending events on process shutdown."""
    global _enabled  # noqa: PLW0603
    if not _enabled:
        return
    _enabled = False
    client = sentry_sdk.get_client()
    if client.is_active():
        client.flush(timeout=2.0)


def _throttled(key: tuple[str, str]) -> bool:
    now = time.monotonic()
    last = _last_report.get(key)
    if last is not None and now - last < SENTRY_RATE_LIMIT_S:
        return True
    _last_report[key] = now
    return False


def capture_error(
    error: BaseException,
    *,
    session_id: str | None = None,
    client_id: str | None = None,
    extra: dict[str, Any] | None = None,
) -> None:
    """Report ``error``; ids default to the current log context."""
    if not _enabled:
        return

    category = classify_error(error)
    if _throttled((category, type(error).__qualname__)):
        return

    context = current_log_context()
    with sentry_sdk.new_scope() as scope:
        scope.set_tag("session_id", session_id or context["session_id"])
        scope.set_tag("client_id", client_id or context["client_id"])
        scope.set_tag("error.category", category)
        for key, value in (extra or {}).items():
            scope.set_extra(key, value)
        sentry_sdk.capture_exception(error)


__all__ = ["init_sentry", "shutdown_sentry", "capture_error"]
