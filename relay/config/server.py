"""Process-level server configuration."""

import os

from ..helpers.env import env_list


HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))

# "production" refuses to start without a JWT signing secret
APP_ENV = (os.getenv("APP_ENV", "development") or "development").lower()

# Persona instructions; falls back to ./system_prompt.txt, then a refusal text
SYSTEM_PROMPT_PATH = os.getenv("SYSTEM_PROMPT_PATH", "/app/data/system_prompt.txt")
SYSTEM_PROMPT_FALLBACK_PATH = "system_prompt.txt"

# X-Forwarded-For is only honoured when the peer is inside one of these
TRUSTED_PROXY_CIDRS = env_list("TRUSTED_PROXY_CIDRS", ("10.42.0.0/16", "10.43.0.0/16"))


__all__ = [
    "HOST",
    "PORT",
    "APP_ENV",
    "SYSTEM_PROMPT_PATH",
    "SYSTEM_PROMPT_FALLBACK_PATH",
    "TRUSTED_PROXY_CIDRS",
]
