"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- secrets: API keys and signing secrets
- auth: credential lifetime and human-verification endpoint
- upstream: backend selection and endpoints
- limits: message bounds, rate limiting and admission caps
- timeouts: upstream HTTP deadlines
- websocket: session timeouts, close codes and allowed origins
- server: bind address, environment and prompt location

Client-facing strings live in ``relay.config.messages`` and are imported
from there directly. Parsing helpers are in relay/helpers/env.py.
"""

from .secrets import (
    OPENAI_API_KEY,
    JWT_SECRET,
    TURNSTILE_SECRET,
    TURNSTILE_SITE_KEY,
)
from .auth import (
    JWT_TTL_S,
    JWT_ALGORITHM,
    DEV_TOKEN,
    TURNSTILE_VERIFY_URL,
    TURNSTILE_TIMEOUT_S,
)
from .upstream import (
    USE_LOCAL_PIPELINE,
    OPENAI_MODEL,
    OPENAI_REALTIME_URL,
    REALTIME_VOICE,
    LOCAL_LLM_URL,
    LOCAL_LLM_MODEL,
    TTS_URL,
    TTS_MODEL,
    TTS_VOICE,
    TTS_SPEED,
    AUDIO_CHUNK_BYTES,
)
from .limits import (
    MIN_MESSAGE_LENGTH,
    MAX_MESSAGE_LENGTH,
    MESSAGE_RATE_INTERVAL_S,
    MESSAGE_BURST,
    MAX_CONNECTIONS_PER_IP,
    STRICT_SINGLE_FLIGHT,
)
from .timeouts import (
    LOCAL_LLM_TIMEOUT_S,
    TTS_TIMEOUT_S,
)
from .websocket import (
    WS_CONNECTION_TIMEOUT_S,
    WS_PING_INTERVAL_S,
    WS_WATCHDOG_TICK_S,
    WS_SEND_TIMEOUT_S,
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_UNAUTHORIZED_CODE,
    WS_CLOSE_BUSY_CODE,
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    ALLOWED_ORIGINS,
)
from .server import (
    HOST,
    PORT,
    APP_ENV,
    SYSTEM_PROMPT_PATH,
    SYSTEM_PROMPT_FALLBACK_PATH,
    TRUSTED_PROXY_CIDRS,
)

__all__ = [
    # secrets
    "OPENAI_API_KEY",
    "JWT_SECRET",
    "TURNSTILE_SECRET",
    "TURNSTILE_SITE_KEY",
    # auth
    "JWT_TTL_S",
    "JWT_ALGORITHM",
    "DEV_TOKEN",
    "TURNSTILE_VERIFY_URL",
    "TURNSTILE_TIMEOUT_S",
    # upstream
    "USE_LOCAL_PIPELINE",
    "OPENAI_MODEL",
    "OPENAI_REALTIME_URL",
    "REALTIME_VOICE",
    "LOCAL_LLM_URL",
    "LOCAL_LLM_MODEL",
    "TTS_URL",
    "TTS_MODEL",
    "TTS_VOICE",
    "TTS_SPEED",
    "AUDIO_CHUNK_BYTES",
    # limits
    "MIN_MESSAGE_LENGTH",
    "MAX_MESSAGE_LENGTH",
    "MESSAGE_RATE_INTERVAL_S",
    "MESSAGE_BURST",
    "MAX_CONNECTIONS_PER_IP",
    "STRICT_SINGLE_FLIGHT",
    # timeouts
    "LOCAL_LLM_TIMEOUT_S",
    "TTS_TIMEOUT_S",
    # websocket
    "WS_CONNECTION_TIMEOUT_S",
    "WS_PING_INTERVAL_S",
    "WS_WATCHDOG_TICK_S",
    "WS_SEND_TIMEOUT_S",
    "WS_CLOSE_NORMAL_CODE",
    "WS_CLOSE_UNAUTHORIZED_CODE",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "ALLOWED_ORIGINS",
    # server
    "HOST",
    "PORT",
    "APP_ENV",
    "SYSTEM_PROMPT_PATH",
    "SYSTEM_PROMPT_FALLBACK_PATH",
    "TRUSTED_PROXY_CIDRS",
]
