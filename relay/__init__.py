"""Avatar relay server package.

This package provides a WebSocket relay between a browser chat client and an
upstream speech+text generation service. The server handles:

- Bearer credential issuance and validation (JWT, optional Turnstile check)
- Per-address admission control and per-connection rate limiting
- Lazy upstream connection management with reconnect-on-demand
- Concurrent streaming of text and audio deltas back to the browser
- WAV to raw PCM16 transcoding for the local TTS pipeline

Architecture Overview:
    - server.py: FastAPI application entry point
    - config/: Configuration modules (environment-based)
    - auth/: Token issuer and human-verification client
    - audio/: WAV container parsing and audio chunking
    - upstream/: Realtime vendor client and local completion+TTS pipeline
    - handlers/: WebSocket session lifecycle and connection registry
    - runtime/: Dependency container assembled at startup
    - telemetry/: Sentry error reporting

Example:
    Start the server with uvicorn:

    $ uvicorn relay.server:app --host 0.0.0.0 --port 8080

Environment Variables:
    Required:
        - OPENAI_API_KEY: Realtime API key (unless USE_LOCAL_PIPELINE=true)
        - JWT_SECRET: Signing secret (required when APP_ENV=production)

    Optional:
        - USE_LOCAL_PIPELINE: Use the local LLM + TTS pipeline instead
        - TURNSTILE_SECRET / TURNSTILE_SITE_KEY: Human verification
        - MAX_CONNECTIONS_PER_IP: Concurrent connection cap per address
"""
