"""Whole-utterance speech synthesis against an OpenAI-compatible endpoint."""

from __future__ import annotations

import logging

import httpx

from ...errors import BadStatusError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

_ERROR_BODY_LIMIT = 500


async def synthesize_wav(
    client: httpx.AsyncClient,
    url: str,
    *,
    text: str,
    model: str,
    voice: str,
    speed: float,
    timeout_s: float,
) -> bytes:
    """POST ``/v1/audio/speech`` and return the WAV body.

    Raises:
        UpstreamUnavailableError: The endpoint could not be reached.
        BadStatusError: The endpoint answered with a non-200 status.
    """
    payload = {
        "model": model,
        "input": text,
        "voice": voice,
        "response_format": "wav",
        "speed": speed,
    }
    logger.info("tts: synthesizing %d characters voice=%s speed=%.2f", len(text), voice, speed)
    try:
        resp = await client.post(url, json=payload, timeout=timeout_s)
    except httpx.HTTPError as exc:
        raise UpstreamUnavailableError(f"tts request failed: {exc}") from exc
    if resp.status_code != 200:
        raise BadStatusError(resp.status_code, resp.text[:_ERROR_BODY_LIMIT])
    logger.info("tts: received %d bytes", len(resp.content))
    return resp.content


__all__ = ["synthesize_wav"]
