"""Credential extraction and validation for WebSocket upgrades.

The bearer credential is read from ``Authorization: Bearer <token>`` first
and from the ``Sec-WebSocket-Protocol`` header second; browsers cannot set
arbitrary headers on a WebSocket, so they pass the token as the single
requested subprotocol.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import WebSocket

from ...auth import TokenIssuer
from ...errors import InvalidTokenError

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


@dataclass(frozen=True, slots=True)
class BearerCredential:
    token: str
    # Set when the token came from the subprotocol header; echoed on accept
    subprotocol: str | None = None


def extract_bearer_token(ws: WebSocket) -> BearerCredential:
    """Return the presented credential (token may be empty)."""
    header = ws.headers.get("authorization", "")
    if header[: len(_BEARER_PREFIX)].lower() == _BEARER_PREFIX:
        token = header[len(_BEARER_PREFIX):].strip()
        if token:
            return BearerCredential(token=token)

    subprotocols = ws.scope.get("subprotocols") or []
    for candidate in subprotocols:
        candidate = candidate.strip()
        if candidate:
            return BearerCredential(token=candidate, subprotocol=candidate)
    return BearerCredential(token="")


def authenticate_websocket(ws: WebSocket, issuer: TokenIssuer) -> BearerCredential | None:
    """Validate the upgrade's credential; returns None when it is rejected."""
    credential = extract_bearer_token(ws)
    try:
        issuer.validate(credential.token)
    except InvalidTokenError as exc:
        logger.warning("WebSocket credential rejected: %s", exc)
        return None
    logger.info("WebSocket credential accepted")
    return credential


__all__ = ["BearerCredential", "extract_bearer_token", "authenticate_websocket"]
