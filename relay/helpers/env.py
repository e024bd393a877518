"""Environment helper utilities.

Provides functions for parsing environment variables into typed values.
Configuration modules call these at import time so they stay free of
parsing logic themselves.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


def env_flag(name: str, default: bool) -> bool:
    """Return True/False for typical truthy env encodings."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_float(name: str, default: float) -> float:
    """Parse a float env var, falling back to ``default`` with a warning."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("failed to parse %s=%r, using default %s", name, raw, default)
        return default


def env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Parse a comma-separated env var into a tuple of non-empty items."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


__all__ = [
    "env_flag",
    "env_float",
    "env_list",
]
