"""Local LLM + TTS backend."""

from .pipeline import SPEECH_PATH, COMPLETIONS_PATH, LocalPipelineClient
from .completion import CompletionStream, parse_sse_line, extract_content_delta

__all__ = [
    "LocalPipelineClient",
    "CompletionStream",
    "parse_sse_line",
    "extract_content_delta",
    "COMPLETIONS_PATH",
    "SPEECH_PATH",
]
