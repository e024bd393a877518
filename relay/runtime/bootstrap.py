"""Runtime dependency bootstrap.

This module eagerly builds all configured runtime services at startup.
Request handlers consume these dependencies directly instead of triggering
lazy singleton initialization at request time.
"""

from __future__ import annotations

import asyncio
import logging

from ..auth import TokenIssuer, TurnstileVerifier
from ..helpers.prompt import load_system_prompt
from ..helpers.validation import validate_env
from ..upstream.local import LocalPipelineClient
from ..upstream.realtime import RealtimeClient
from ..handlers.connections import ConnectionRegistry
from ..config import (
    JWT_SECRET,
    OPENAI_MODEL,
    OPENAI_API_KEY,
    TURNSTILE_SECRET,
    USE_LOCAL_PIPELINE,
    TURNSTILE_SITE_KEY,
    MAX_CONNECTIONS_PER_IP,
)

from .dependencies import RuntimeDeps, SessionSettings

logger = logging.getLogger(__name__)


def _build_backend() -> RealtimeClient | LocalPipelineClient:
    if USE_LOCAL_PIPELINE:
        logger.info("upstream backend: local completion + TTS pipeline")
        return LocalPipelineClient()
    if not OPENAI_API_KEY:
        raise RuntimeError("OPENAI_API_KEY is required when USE_LOCAL_PIPELINE is disabled")
    logger.info("upstream backend: realtime model=%s", OPENAI_MODEL)
    return RealtimeClient(OPENAI_API_KEY)


async def build_runtime_deps() -> RuntimeDeps:
    """Build runtime dependencies eagerly for the configured backend.

    Raises:
        RuntimeError: Required configuration is missing.
    """
    validate_env()
    system_prompt = await asyncio.to_thread(load_system_prompt)
    issuer = TokenIssuer(JWT_SECRET, verifier=TurnstileVerifier(TURNSTILE_SECRET))

    return RuntimeDeps(
        issuer=issuer,
        registry=ConnectionRegistry(MAX_CONNECTIONS_PER_IP),
        backend=_build_backend(),
        system_prompt=system_prompt,
        settings=SessionSettings(),
        turnstile_site_key=TURNSTILE_SITE_KEY,
    )


__all__ = ["build_runtime_deps"]
