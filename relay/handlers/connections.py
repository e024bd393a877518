"""Per-address admission control for WebSocket connections.

The registry is the only state shared between sessions. Every mutation of
the per-address counters happens under a single ``threading.Lock`` so the
registry stays correct no matter which thread or task releases a slot.

Each admitted connection holds an ``AdmissionSlot``. Releasing a slot is
idempotent: the first ``release()`` decrements the counter, later calls do
nothing. Handlers release in a ``finally`` block, so any number of
shutdown paths converge on exactly one decrement.

Example:
    registry = ConnectionRegistry(max_per_address=10)

    slot = registry.try_acquire("203.0.113.7")
    if slot is None:
        ...  # reject with 429
    try:
        ...  # serve the session
    finally:
        slot.release()
"""

from __future__ import annotations

import logging
import threading

from ..config import MAX_CONNECTIONS_PER_IP

logger = logging.getLogger(__name__)


class AdmissionSlot:
    """A held admission for one connection from one address."""

    __slots__ = ("address", "_registry", "_released", "_lock")

    def __init__(self, registry: ConnectionRegistry, address: str) -> None:
        self.address = address
        self._registry = registry
        self._released = False
        self._lock = threading.Lock()

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> bool:
        """Return the slot to the registry. Returns False if already released."""
        with self._lock:
            if self._released:
                return False
            self._released = True
        self._registry._release(self.address)
        return True


class ConnectionRegistry:
    """Counts live connections per source address and enforces a cap.

    Attributes:
        max_per_address: Maximum concurrent connections per address.
    """

    def __init__(self, max_per_address: int = MAX_CONNECTIONS_PER_IP) -> None:
        self.max_per_address = max(1, int(max_per_address))
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def try_acquire(self, address: str) -> AdmissionSlot | None:
        """Admit one connection from ``address``, or return None at the cap."""
        with self._lock:
            current = self._counts.get(address, 0)
            if current >= self.max_per_address:
                logger.warning(
                    "admission rejected for %s: %d/%d connections",
                    address,
                    current,
                    self.max_per_address,
                )
                return None
            self._counts[address] = current + 1
            logger.info(
                "admission granted for %s: %d/%d connections",
                address,
                current + 1,
                self.max_per_address,
            )
        return AdmissionSlot(self, address)

    def _release(self, address: str) -> None:
        with self._lock:
            current = self._counts.get(address, 0)
            if current <= 1:
                self._counts.pop(address, None)
                remaining = 0
            else:
                remaining = current - 1
                self._counts[address] = remaining
        logger.info("admission released for %s: %d remaining", address, remaining)

    def count(self, address: str) -> int:
        with self._lock:
            return self._counts.get(address, 0)

    def total(self) -> int:
        with self._lock:
            return sum(self._counts.values())

    def snapshot(self) -> dict[str, int]:
        """Return a copy of the per-address counters."""
        with self._lock:
            return dict(self._counts)


__all__ = ["AdmissionSlot", "ConnectionRegistry"]
