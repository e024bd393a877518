"""Session credential issuance and validation.

Credentials are HS256 JWTs carrying only ``iat`` and ``exp``. When no signing
secret is configured the issuer runs in open mode: it hands out the fixed
development token and every validation succeeds with empty claims. Open mode
is logged on every use and refused at startup when APP_ENV=production.
"""

from __future__ import annotations

import time
import logging
from typing import Any
from collections.abc import Callable

import jwt

from .turnstile import TurnstileVerifier
from ..errors import SigningError, InvalidTokenError, VerificationError
from ..config.auth import DEV_TOKEN, JWT_TTL_S, JWT_ALGORITHM

logger = logging.getLogger(__name__)

# Type alias for injectable time functions (used in testing)
TimeFn = Callable[[], float]


class TokenIssuer:
    """Mints and validates short-lived bearer credentials."""

    def __init__(
        self,
        secret: str,
        *,
        verifier: TurnstileVerifier | None = None,
        ttl_s: float = JWT_TTL_S,
        algorithm: str = JWT_ALGORITHM,
        now_fn: TimeFn | None = None,
    ) -> None:
        self._secret = secret
        self._verifier = verifier or TurnstileVerifier("")
        self.ttl_s = float(ttl_s)
        self.algorithm = algorithm
        self._now = now_fn or time.time

    @property
    def open_mode(self) -> bool:
        return not self._secret

    @property
    def verifier(self) -> TurnstileVerifier:
        return self._verifier

    def issue(self) -> str:
        """Return a fresh credential, or the development token in open mode.

        Raises:
            SigningError: The token could not be encoded.
        """
        if self.open_mode:
            logger.warning("JWT_SECRET not configured, issuing development token")
            return DEV_TOKEN

        now = int(self._now())
        claims = {"iat": now, "exp": now + int(self.ttl_s)}
        try:
            return jwt.encode(claims, self._secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise SigningError(f"failed to sign credential: {exc}") from exc

    async def verify_and_issue(self, challenge: str, caller_address: str) -> str:
        """Verify a human-verification challenge, then issue a credential.

        Raises:
            VerificationError: The challenge was rejected or the verifier was
                unreachable. No credential is issued in either case.
            SigningError: The token could not be encoded.
        """
        if not await self._verifier.verify(challenge, caller_address):
            raise VerificationError("rejected")
        return self.issue()

    def validate(self, token: str) -> dict[str, Any]:
        """Return the credential's claims.

        Raises:
            InvalidTokenError: The token is malformed, has a bad signature or
                has expired. Never raised in open mode.
        """
        if self.open_mode:
            logger.warning("JWT_SECRET not configured, accepting credential without verification")
            return {}
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
                leeway=0,
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("credential expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError(f"invalid credential: {exc}") from exc


__all__ = ["TokenIssuer"]
