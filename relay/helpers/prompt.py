"""System prompt loading with a volume-then-local fallback chain."""

from __future__ import annotations

import logging
from pathlib import Path

from ..config.messages import SYSTEM_PROMPT_REFUSAL
from ..config.server import SYSTEM_PROMPT_PATH, SYSTEM_PROMPT_FALLBACK_PATH

logger = logging.getLogger(__name__)


def _read_prompt(path: str | Path) -> str | None:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        return None
    text = text.strip()
    return text or None


def load_system_prompt(
    primary: str | Path = SYSTEM_PROMPT_PATH,
    fallback: str | Path = SYSTEM_PROMPT_FALLBACK_PATH,
) -> str:
    """Return persona instructions from the first readable, non-empty file.

    When neither file yields a prompt the refusal instructions are returned
    so the assistant declines to answer instead of running without a persona.
    """
    for candidate in (primary, fallback):
        prompt = _read_prompt(candidate)
        if prompt is not None:
            logger.info("loaded system prompt from %s (%d chars)", candidate, len(prompt))
            return prompt
    logger.error(
        "system prompt not found at %s or %s; using refusal instructions",
        primary,
        fallback,
    )
    return SYSTEM_PROMPT_REFUSAL


__all__ = ["load_system_prompt"]
