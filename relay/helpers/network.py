"""Client address resolution behind trusted reverse proxies."""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


def parse_networks(cidrs: Iterable[str]) -> tuple[IPNetwork, ...]:
    """Parse CIDR strings, skipping (and logging) invalid entries."""
    networks: list[IPNetwork] = []
    for cidr in cidrs:
        try:
            networks.append(ipaddress.ip_network(cidr, strict=False))
        except ValueError:
            logger.warning("ignoring invalid trusted proxy CIDR %r", cidr)
    return tuple(networks)


def is_trusted_proxy(peer: str, networks: Iterable[IPNetwork]) -> bool:
    try:
        address = ipaddress.ip_address(peer)
    except ValueError:
        return False
    return any(address in network for network in networks)


def resolve_client_address(
    peer: str | None,
    headers: Mapping[str, str],
    trusted: Iterable[IPNetwork],
) -> str:
    """Return the address used for admission control and logging.

    The first ``X-Forwarded-For`` entry is used only when the direct peer is a
    trusted proxy; otherwise the peer address is authoritative.
    """
    peer_address = peer or "unknown"
    if peer and is_trusted_proxy(peer, trusted):
        forwarded = headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return peer_address


__all__ = [
    "IPNetwork",
    "parse_networks",
    "is_trusted_proxy",
    "resolve_client_address",
]
