"""Cloudflare Turnstile challenge verification.

A single POST per challenge, no retries. Any transport or decoding failure
is reported as ``VerificationError("unavailable")`` so callers fail closed.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import VerificationError
from ..config.auth import TURNSTILE_TIMEOUT_S, TURNSTILE_VERIFY_URL

logger = logging.getLogger(__name__)


class TurnstileVerifier:
    """Checks challenge responses against the Turnstile siteverify API.

    With an empty ``secret`` every challenge is accepted (development mode)
    and a warning is logged on each call.
    """

    def __init__(
        self,
        secret: str,
        *,
        verify_url: str = TURNSTILE_VERIFY_URL,
        timeout_s: float = TURNSTILE_TIMEOUT_S,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._secret = secret
        self._verify_url = verify_url
        self._timeout_s = timeout_s
        self._client = http_client

    @property
    def enabled(self) -> bool:
        return bool(self._secret)

    async def verify(self, response: str, remote_ip: str) -> bool:
        """Return True when the challenge response is affirmed.

        Raises:
            VerificationError: reason ``unavailable`` when the verifier could
                not be reached or answered with something other than JSON.
        """
        if not self._secret:
            logger.warning("TURNSTILE_SECRET not configured, allowing all challenges")
            return True

        payload = {"secret": self._secret, "response": response, "remoteip": remote_ip}
        try:
            result = await self._post(payload)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("turnstile verification request failed: %s", exc)
            raise VerificationError("unavailable") from exc

        success = bool(result.get("success"))
        if not success:
            logger.info("turnstile rejected challenge: error-codes=%s", result.get("error-codes", []))
        return success

    async def _post(self, payload: dict[str, str]) -> dict[str, Any]:
        if self._client is not None:
            resp = await self._client.post(self._verify_url, json=payload, timeout=self._timeout_s)
        else:
            async with httpx.AsyncClient(timeout=self._timeout_s) as client:
                resp = await client.post(self._verify_url, json=payload)
        data = resp.json()
        if not isinstance(data, dict):
            raise ValueError("siteverify response is not a JSON object")
        return data


__all__ = ["TurnstileVerifier"]
