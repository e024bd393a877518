"""Credential issuance and human-verification configuration."""

import os


# Credential lifetime from issuance (30 minutes)
JWT_TTL_S = float(os.getenv("JWT_TTL_S", "1800"))
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# Sentinel credential handed out when no signing secret is configured
DEV_TOKEN = os.getenv("DEV_TOKEN", "dev-token")

TURNSTILE_VERIFY_URL = os.getenv(
    "TURNSTILE_VERIFY_URL",
    "https://challenges.cloudflare.com/turnstile/v0/siteverify",
)
TURNSTILE_TIMEOUT_S = float(os.getenv("TURNSTILE_TIMEOUT_S", "10"))


__all__ = [
    "JWT_TTL_S",
    "JWT_ALGORITHM",
    "DEV_TOKEN",
    "TURNSTILE_VERIFY_URL",
    "TURNSTILE_TIMEOUT_S",
]
