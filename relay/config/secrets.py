"""Secrets and authentication related configuration.

Empty values are meaningful: an empty JWT_SECRET switches credential checks
into open mode and an empty TURNSTILE_SECRET accepts every challenge. The
bootstrap refuses open mode when APP_ENV=production.
"""

import os


# Realtime vendor key (required unless USE_LOCAL_PIPELINE=true)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")

# HS256 signing secret for session credentials
JWT_SECRET = os.getenv("JWT_SECRET", "")

# Cloudflare Turnstile server secret and public site key
TURNSTILE_SECRET = os.getenv("TURNSTILE_SECRET", "")
TURNSTILE_SITE_KEY = os.getenv("TURNSTILE_SITE_KEY", "")


__all__ = [
    "OPENAI_API_KEY",
    "JWT_SECRET",
    "TURNSTILE_SECRET",
    "TURNSTILE_SITE_KEY",
]
