"""Local LLM + TTS pipeline.

One exchange is a streaming chat completion followed by a single speech
synthesis call over the full response text. There is no connection to keep
between exchanges; each one is a fresh pair of HTTP requests on a shared
``httpx.AsyncClient``.

Event order for a successful exchange is strict:

    TextDelta* -> TextDone -> AudioDelta* -> AudioDone -> ResponseDone
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterator

import httpx

from .speech import synthesize_wav
from .completion import CompletionStream
from ..events import AudioDelta, AudioDone, ResponseDone, TextDone, UpstreamEvent
from ...audio import extract_pcm16, iter_base64_chunks
from ...config.timeouts import TTS_TIMEOUT_S, LOCAL_LLM_TIMEOUT_S
from ...config.upstream import (
    TTS_URL,
    TTS_MODEL,
    TTS_VOICE,
    TTS_SPEED,
    LOCAL_LLM_URL,
    LOCAL_LLM_MODEL,
    AUDIO_CHUNK_BYTES,
)

logger = logging.getLogger(__name__)

COMPLETIONS_PATH = "/v1/chat/completions"
SPEECH_PATH = "/v1/audio/speech"


class LocalPipelineClient:
    """Chat completion + speech synthesis backend."""

    def __init__(
        self,
        *,
        llm_url: str = LOCAL_LLM_URL,
        llm_model: str = LOCAL_LLM_MODEL,
        tts_url: str = TTS_URL,
        tts_model: str = TTS_MODEL,
        voice: str = TTS_VOICE,
        speed: float = TTS_SPEED,
        llm_timeout_s: float = LOCAL_LLM_TIMEOUT_S,
        tts_timeout_s: float = TTS_TIMEOUT_S,
        chunk_bytes: int = AUDIO_CHUNK_BYTES,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.llm_url = llm_url.rstrip("/")
        self.llm_model = llm_model
        self.tts_url = tts_url.rstrip("/")
        self.tts_model = tts_model
        self.voice = voice
        self.speed = speed
        self.llm_timeout_s = llm_timeout_s
        self.tts_timeout_s = tts_timeout_s
        self.chunk_bytes = chunk_bytes
        self._client = http_client or httpx.AsyncClient()
        logger.info(
            "local pipeline: llm=%s model=%s tts=%s voice=%s speed=%.2f",
            self.llm_url,
            self.llm_model,
            self.tts_url,
            self.voice,
            self.speed,
        )

    def stream_completion(self, system_prompt: str, user_text: str) -> CompletionStream:
        payload = {
            "model": self.llm_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_text},
            ],
            "stream": True,
        }
        return CompletionStream(
            self._client,
            f"{self.llm_url}{COMPLETIONS_PATH}",
            payload,
            self.llm_timeout_s,
        )

    async def synthesize_speech(
        self,
        text: str,
        voice: str | None = None,
        speed: float | None = None,
    ) -> bytes:
        return await synthesize_wav(
            self._client,
            f"{self.tts_url}{SPEECH_PATH}",
            text=text,
            model=self.tts_model,
            voice=voice or self.voice,
            speed=self.speed if speed is None else speed,
            timeout_s=self.tts_timeout_s,
        )

    def stream_audio(self, wav: bytes) -> Iterator[AudioDelta]:
        """Transcode ``wav`` and yield it as base64 audio chunks.

        Raises:
            MalformedContainerError: ``wav`` is not a usable 16-bit WAV.
        """
        pcm = extract_pcm16(wav)
        logger.debug("local pipeline: %d PCM bytes to stream", len(pcm))
        for chunk in iter_base64_chunks(pcm, self.chunk_bytes):
            yield AudioDelta(audio=chunk)

    async def run_exchange(self, system_prompt: str, user_text: str) -> AsyncIterator[UpstreamEvent]:
        """Run one full exchange, yielding events in protocol order.

        Any stage failure propagates to the caller after the events already
        yielded; no further events follow it.
        """
        stream = self.stream_completion(system_prompt, user_text)
        async for delta in stream:
            yield delta
        yield TextDone()

        text = stream.text
        if text.strip():
            wav = await self.synthesize_speech(text)
            for chunk in self.stream_audio(wav):
                yield chunk
        else:
            logger.warning("local pipeline: empty completion, skipping speech synthesis")
        yield AudioDone()
        yield ResponseDone()

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["LocalPipelineClient", "COMPLETIONS_PATH", "SPEECH_PATH"]
