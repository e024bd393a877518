"""Inbound chat message validation and sanitization."""

from .sanitize import sanitize_user_text
from .validation import validate_user_message

__all__ = ["sanitize_user_text", "validate_user_message"]
