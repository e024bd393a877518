"""User text sanitization."""

from __future__ import annotations

import re

# C0 control characters except tab (0x09) and newline (0x0A)
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b-\x1f]")


def sanitize_user_text(text: str) -> str:
    """Trim surrounding whitespace and drop control characters except \\n and \\t."""
    return _CONTROL_CHARS_RE.sub("", text).strip()


__all__ = ["sanitize_user_text"]
