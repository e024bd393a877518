"""Main FastAPI server for the avatar relay.

This module wires the HTTP and WebSocket surface:

- POST /api/token: issue a session credential
- POST /api/verify-turnstile: check a human-verification challenge, then issue
- GET /api/turnstile-sitekey: public site key for the browser widget
- GET /health: liveness probe
- WS /ws/chat: the relay itself

Server Lifecycle:
    1. On startup: initialize Sentry and build the runtime dependencies
       (token issuer, connection registry, upstream backend), unless they
       were injected into create_app()
    2. Accept browser connections on /ws/chat
    3. On shutdown: close pooled upstream HTTP clients and flush Sentry

Example:
    Run directly with uvicorn:
        $ uvicorn relay.server:app --host 0.0.0.0 --port 8080

    Or via the package entry point:
        $ python -m relay
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv

# .env values must be in the environment before relay.config is imported
load_dotenv()

import orjson  # noqa: E402
from fastapi import FastAPI, Request, WebSocket  # noqa: E402
from fastapi.responses import ORJSONResponse  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from .config import messages  # noqa: E402
from .config import ALLOWED_ORIGINS, USE_LOCAL_PIPELINE  # noqa: E402
from .logging import configure_logging  # noqa: E402
from .runtime import RuntimeDeps, build_runtime_deps  # noqa: E402
from .errors import SigningError, VerificationError  # noqa: E402
from .telemetry import init_sentry, capture_error, shutdown_sentry  # noqa: E402
from .helpers.network import resolve_client_address  # noqa: E402
from .handlers.websocket.manager import handle_websocket_connection  # noqa: E402

logger = logging.getLogger(__name__)


def _runtime_deps(app: FastAPI) -> RuntimeDeps:
    deps = app.state.runtime_deps
    if deps is None:
        raise RuntimeError("runtime dependencies are not initialized")
    return deps


def _error(status_code: int, message: str) -> ORJSONResponse:
    return ORJSONResponse({"error": message}, status_code=status_code)


async def issue_token(request: Request):
    """Issue a credential without a human-verification check."""
    deps = _runtime_deps(request.app)
    try:
        token = deps.issuer.issue()
    except SigningError as exc:
        logger.error("token signing failed: %s", exc)
        capture_error(exc)
        return _error(500, messages.TOKEN_GENERATION_FAILED)
    return {"jwt": token}


async def verify_turnstile(request: Request):
    """Verify a Turnstile challenge response and issue a credential.

    Body: ``{"token": "<challenge response>"}``. Status codes: 400 for a
    malformed body, 401 when the challenge is rejected, 500 when the
    verifier is unreachable or signing fails.
    """
    deps = _runtime_deps(request.app)
    try:
        body = orjson.loads(await request.body())
    except orjson.JSONDecodeError:
        return _error(400, messages.INVALID_REQUEST)
    challenge = body.get("token") if isinstance(body, dict) else None
    if not isinstance(challenge, str) or not challenge.strip():
        return _error(400, messages.INVALID_REQUEST)

    peer = request.client.host if request.client else None
    caller = resolve_client_address(peer, request.headers, deps.settings.trusted_networks)
    try:
        token = await deps.issuer.verify_and_issue(challenge, caller)
    except VerificationError as exc:
        status_code = 401 if exc.reason == "rejected" else 500
        return ORJSONResponse(
            {"success": False, "error": messages.VERIFICATION_FAILED},
            status_code=status_code,
        )
    except SigningError as exc:
        logger.error("token signing failed: %s", exc)
        capture_error(exc)
        return ORJSONResponse(
            {"success": False, "error": messages.TOKEN_GENERATION_FAILED},
            status_code=500,
        )
    return {"success": True, "jwt": token}


async def turnstile_sitekey(request: Request):
    """Public site key for the browser's Turnstile widget."""
    return {"siteKey": _runtime_deps(request.app).turnstile_site_key}


async def health():
    """Health check endpoint (no authentication required)."""
    return {"status": "healthy"}


async def websocket_endpoint(websocket: WebSocket):
    """Browser chat relay endpoint."""
    await handle_websocket_connection(websocket, _runtime_deps(websocket.app))


def create_app(runtime_deps: RuntimeDeps | None = None) -> FastAPI:
    """Build the ASGI application.

    Args:
        runtime_deps: Pre-built services. When omitted they are assembled on
            startup by build_runtime_deps().
    """
    app = FastAPI(title="avatar-relay", default_response_class=ORJSONResponse)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(ALLOWED_ORIGINS),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept", "Authorization", "Sec-WebSocket-Protocol"],
    )
    app.state.runtime_deps = runtime_deps

    @app.on_event("startup")
    async def build_runtime() -> None:
        """Build runtime services before accepting traffic."""
        init_sentry(backend="local" if USE_LOCAL_PIPELINE else "realtime")
        if app.state.runtime_deps is None:
            app.state.runtime_deps = await build_runtime_deps()
            logger.info("runtime ready")

    @app.on_event("shutdown")
    async def stop_runtime() -> None:
        """Release pooled upstream clients and flush pending error reports."""
        if app.state.runtime_deps is not None:
            await app.state.runtime_deps.shutdown()
        shutdown_sentry()

    app.add_api_route("/api/token", issue_token, methods=["POST"])
    app.add_api_route("/api/verify-turnstile", verify_turnstile, methods=["POST"])
    app.add_api_route("/api/turnstile-sitekey", turnstile_sitekey, methods=["GET"])
    app.add_api_route("/health", health, methods=["GET"])
    app.add_api_websocket_route("/ws/chat", websocket_endpoint)
    return app


configure_logging()
app = create_app()
