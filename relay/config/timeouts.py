"""Upstream HTTP timeouts.

The realtime vendor connection carries no explicit timeout beyond the
transport's own open/close handshake limits.
"""

import os


# Streaming chat completion deadline (whole request)
LOCAL_LLM_TIMEOUT_S = float(os.getenv("LOCAL_LLM_TIMEOUT_S", "120"))

# Text-to-speech synthesis deadline
TTS_TIMEOUT_S = float(os.getenv("TTS_TIMEOUT_S", "120"))


__all__ = [
    "LOCAL_LLM_TIMEOUT_S",
    "TTS_TIMEOUT_S",
]
