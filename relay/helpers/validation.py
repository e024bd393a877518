"""Environment validation helpers."""

from __future__ import annotations

import logging

from ..config import APP_ENV, JWT_SECRET, OPENAI_API_KEY, USE_LOCAL_PIPELINE, TURNSTILE_SECRET

logger = logging.getLogger(__name__)


def validate_env(
    *,
    app_env: str = APP_ENV,
    jwt_secret: str = JWT_SECRET,
    openai_api_key: str = OPENAI_API_KEY,
    use_local_pipeline: bool = USE_LOCAL_PIPELINE,
    turnstile_secret: str = TURNSTILE_SECRET,
) -> None:
    """Validate required configuration once during startup.

    Raises:
        RuntimeError: Listing every missing setting.
    """
    errors: list[str] = []

    if not use_local_pipeline and not openai_api_key:
        errors.append("OPENAI_API_KEY environment variable is required unless USE_LOCAL_PIPELINE=true")
    if app_env == "production" and not jwt_secret:
        errors.append("JWT_SECRET environment variable is required when APP_ENV=production")

    if errors:
        raise RuntimeError("Configuration errors: " + "; ".join(errors))

    if not jwt_secret:
        logger.warning("JWT_SECRET not set; running in open mode (every credential accepted)")
    if not turnstile_secret:
        logger.warning("TURNSTILE_SECRET not set; human verification disabled")


__all__ = ["validate_env"]
