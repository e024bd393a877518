"""Upstream backend selection and endpoint configuration.

Exactly one upstream is active per deployment:

Realtime (default):
    A duplex WebSocket session with the vendor realtime API. One connection
    per browser session, opened lazily on the first user message.

Local pipeline (USE_LOCAL_PIPELINE=true):
    An OpenAI-compatible streaming chat completion endpoint followed by an
    OpenAI-compatible text-to-speech endpoint. Every exchange is a fresh
    pair of HTTP calls.
"""

import os

from ..helpers.env import env_flag, env_float


USE_LOCAL_PIPELINE = env_flag("USE_LOCAL_PIPELINE", False)

# ============================================================================
# Realtime vendor
# ============================================================================

OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-realtime-mini")
OPENAI_REALTIME_URL = os.getenv("OPENAI_REALTIME_URL", "wss://api.openai.com/v1/realtime")
REALTIME_VOICE = os.getenv("REALTIME_VOICE", "cedar")

# ============================================================================
# Local pipeline
# ============================================================================

LOCAL_LLM_URL = os.getenv(
    "LOCAL_LLM_URL",
    "https://llama.k3s.local.christianmoore.me:8443/qwen2.5-7b-instruct",
).rstrip("/")
LOCAL_LLM_MODEL = os.getenv("LOCAL_LLM_MODEL", "qwen2.5-7b-instruct")

TTS_URL = os.getenv("TTS_URL", "https://llama.k3s.local.christianmoore.me:8443").rstrip("/")
TTS_MODEL = os.getenv("TTS_MODEL", "tts-1")
TTS_VOICE = os.getenv("TTS_VOICE", "onyx")
TTS_SPEED = env_float("TTS_SPEED", 0.95)

# Raw PCM bytes per audio_delta frame (before base64)
AUDIO_CHUNK_BYTES = int(os.getenv("AUDIO_CHUNK_BYTES", "4096"))


__all__ = [
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
]
