"""Bearer credential issuance and human verification."""

from .tokens import TokenIssuer
from .turnstile import TurnstileVerifier

__all__ = ["TokenIssuer", "TurnstileVerifier"]
