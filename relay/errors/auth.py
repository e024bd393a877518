"""Credential issuance and verification exceptions."""


class AuthenticationError(Exception):
    """Base class for credential failures."""


class InvalidTokenError(AuthenticationError):
    """Raised when a credential is malformed, tampered with, or expired."""


class SigningError(AuthenticationError):
    """Raised when a credential cannot be signed."""


class VerificationError(AuthenticationError):
    """Raised when a human-verification challenge does not pass.

    Attributes:
        reason: ``"rejected"`` when the verifier answered negatively,
            ``"unavailable"`` when the verifier could not be reached.
    """

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or f"verification failed: {reason}")
        self.reason = reason


__all__ = [
    "AuthenticationError",
    "InvalidTokenError",
    "SigningError",
    "VerificationError",
]
