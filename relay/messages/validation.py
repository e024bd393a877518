"""Validation of inbound chat messages.

Checks run on the raw text first (length bounds), then on the sanitized
text (must not be empty). Every failure carries the client-visible message
from ``relay.config.messages``.
"""

from __future__ import annotations

from .sanitize import sanitize_user_text
from ..errors import ValidationError
from ..config import messages
from ..config.limits import MAX_MESSAGE_LENGTH, MIN_MESSAGE_LENGTH


def validate_user_message(
    raw: object,
    *,
    min_length: int = MIN_MESSAGE_LENGTH,
    max_length: int = MAX_MESSAGE_LENGTH,
) -> str:
    """Return the sanitized message text.

    Raises:
        ValidationError: ``message_empty`` for missing or blank text,
            ``message_length`` when outside the configured bounds.
    """
    if raw is None or raw == "":
        raise ValidationError("message_empty", messages.MESSAGE_EMPTY)
    if not isinstance(raw, str):
        raise ValidationError("message_invalid", messages.INVALID_MESSAGE_FORMAT)

    length = len(raw)
    if length < min_length or length > max_length:
        raise ValidationError(
            "message_length",
            messages.MESSAGE_LENGTH.format(min_length=min_length, max_length=max_length),
        )

    sanitized = sanitize_user_text(raw)
    if len(sanitized) < max(1, min_length):
        raise ValidationError("message_empty", messages.MESSAGE_EMPTY)
    return sanitized


__all__ = ["validate_user_message"]
