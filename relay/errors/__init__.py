"""Centralized exception classes for the relay.

This module re-exports all domain-specific exceptions from their respective
modules, providing a single import point for error handling.

Organization:
    - limits.py: Rate limiting errors with retry info
    - validation.py: Message validation errors with error codes
    - auth.py: Credential signing, parsing and verification errors
    - audio.py: WAV container errors
    - upstream.py: Realtime vendor and local pipeline errors
    - classify.py: Exception-to-label mapping
"""

from .limits import RateLimitError
from .classify import classify_error
from .validation import ValidationError
from .audio import MalformedContainerError, UnsupportedAudioFormatError
from .auth import SigningError, InvalidTokenError, VerificationError, AuthenticationError
from .upstream import (
    UpstreamError,
    BadStatusError,
    SendFailedError,
    StreamEndedError,
    ConfigRejectedError,
    UpstreamUnavailableError,
)

__all__ = [
    # Rate limiting
    "RateLimitError",
    # Validation
    "ValidationError",
    # Auth
    "AuthenticationError",
    "InvalidTokenError",
    "SigningError",
    "VerificationError",
    # Audio
    "MalformedContainerError",
    "UnsupportedAudioFormatError",
    # Upstream
    "UpstreamError",
    "UpstreamUnavailableError",
    "BadStatusError",
    "ConfigRejectedError",
    "SendFailedError",
    "StreamEndedError",
    # Classification
    "classify_error",
]
