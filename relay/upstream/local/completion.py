"""Streaming chat completion against an OpenAI-compatible endpoint.

The endpoint answers ``POST /v1/chat/completions`` with ``stream: true`` as
server-sent events::

    data: {"choices": [{"delta": {"content": "Hel"}}]}
    data: {"choices": [{"delta": {"content": "lo"}}]}
    data: [DONE]

Each content delta is yielded the moment its line arrives. Lines that are
not valid JSON are logged and skipped.
"""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import AsyncIterator

import httpx
import orjson

from ..events import TextDelta
from ...errors import BadStatusError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

SSE_DATA_PREFIX = "data:"
SSE_DONE_MARKER = "[DONE]"
_ERROR_BODY_LIMIT = 500


def parse_sse_line(line: str) -> str | None:
    """Return the payload of an SSE ``data:`` line, or None for other lines."""
    line = line.strip()
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    return line[len(SSE_DATA_PREFIX):].strip()


def extract_content_delta(chunk: Any) -> str:
    """Return ``choices[0].delta.content`` from a completion chunk, or ''."""
    if not isinstance(chunk, dict):
        return ""
    choices = chunk.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return ""
    content = delta.get("content")
    return content if isinstance(content, str) else ""


class CompletionStream:
    """Lazy, single-use sequence of text deltas for one completion.

    Iterate it once with ``async for``; afterwards ``text`` holds the full
    concatenated response.

    Raises (during iteration):
        UpstreamUnavailableError: The endpoint could not be reached or the
            stream broke mid-way.
        BadStatusError: The endpoint answered with a non-200 status.
    """

    def __init__(self, client: httpx.AsyncClient, url: str, payload: dict[str, Any], timeout_s: float) -> None:
        self._client = client
        self._url = url
        self._payload = payload
        self._timeout_s = timeout_s
        self._parts: list[str] = []
        self._started = False

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def __aiter__(self) -> AsyncIterator[TextDelta]:
        if self._started:
            raise RuntimeError("completion stream can only be consumed once")
        self._started = True
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[TextDelta]:
        try:
            async with self._client.stream(
                "POST",
                self._url,
                json=self._payload,
                timeout=self._timeout_s,
            ) as resp:
                if resp.status_code != 200:
                    body = (await resp.aread()).decode("utf-8", errors="replace")
                    raise BadStatusError(resp.status_code, body[:_ERROR_BODY_LIMIT])
                async for line in resp.aiter_lines():
                    data = parse_sse_line(line)
                    if data is None or not data:
                        continue
                    if data == SSE_DONE_MARKER:
                        break
                    try:
                        chunk = orjson.loads(data)
                    except orjson.JSONDecodeError:
                        logger.warning("completion: skipping unparsable chunk (%d bytes)", len(data))
                        continue
                    content = extract_content_delta(chunk)
                    if content:
                        self._parts.append(content)
                        yield TextDelta(text=content)
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(f"completion request failed: {exc}") from exc
        logger.info("completion finished: %d characters", len(self.text))


__all__ = [
    "CompletionStream",
    "parse_sse_line",
    "extract_content_delta",
]
