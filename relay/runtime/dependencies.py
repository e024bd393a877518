"""Runtime dependency container.

All long-lived runtime services are assembled at startup and passed explicitly
through request handlers. This avoids lazy singleton initialization during
request processing.
"""

from __future__ import annotations

from dataclasses import field, dataclass
from typing import TYPE_CHECKING

from ..helpers.network import IPNetwork, parse_networks
from ..config import (
    OPENAI_MODEL,
    MESSAGE_BURST,
    ALLOWED_ORIGINS,
    WS_SEND_TIMEOUT_S,
    MAX_MESSAGE_LENGTH,
    MIN_MESSAGE_LENGTH,
    WS_PING_INTERVAL_S,
    WS_WATCHDOG_TICK_S,
    STRICT_SINGLE_FLIGHT,
    TRUSTED_PROXY_CIDRS,
    MESSAGE_RATE_INTERVAL_S,
    WS_CONNECTION_TIMEOUT_S,
)

if TYPE_CHECKING:
    from ..auth import TokenIssuer
    from ..upstream.local import LocalPipelineClient
    from ..upstream.realtime import RealtimeClient
    from ..handlers.connections import ConnectionRegistry


def _default_trusted_networks() -> tuple[IPNetwork, ...]:
    return parse_networks(TRUSTED_PROXY_CIDRS)


@dataclass(frozen=True, slots=True)
class SessionSettings:
    """Per-session knobs, defaulting to the environment configuration."""

    realtime_model: str = OPENAI_MODEL
    strict_single_flight: bool = STRICT_SINGLE_FLIGHT
    connection_timeout_s: float = WS_CONNECTION_TIMEOUT_S
    ping_interval_s: float = WS_PING_INTERVAL_S
    watchdog_tick_s: float = WS_WATCHDOG_TICK_S
    send_timeout_s: float = WS_SEND_TIMEOUT_S
    message_rate_interval_s: float = MESSAGE_RATE_INTERVAL_S
    message_burst: int = MESSAGE_BURST
    min_message_length: int = MIN_MESSAGE_LENGTH
    max_message_length: int = MAX_MESSAGE_LENGTH
    allowed_origins: tuple[str, ...] = ALLOWED_ORIGINS
    trusted_networks: tuple[IPNetwork, ...] = field(default_factory=_default_trusted_networks)


@dataclass(slots=True)
class RuntimeDeps:
    """Process-wide runtime services initialized during startup."""

    issuer: TokenIssuer
    registry: ConnectionRegistry
    backend: RealtimeClient | LocalPipelineClient
    system_prompt: str
    settings: SessionSettings = field(default_factory=SessionSettings)
    turnstile_site_key: str = ""

    async def shutdown(self) -> None:
        aclose = getattr(self.backend, "aclose", None)
        if aclose is not None:
            await aclose()


__all__ = ["RuntimeDeps", "SessionSettings"]
