"""Expiring cache for FDC lookups."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class Cache(Protocol):
    """Cache interface for FDC payloads keyed by request."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""


@dataclass
class MonotonicTtlCache(Cache):
    """Process-local cache measured against a monotonic clock.

    Wall-clock jumps do not extend or cut short an entry's lifetime.
    """

    clock: Callable[[], float] = time.monotonic
    _entries: dict[str, tuple[float, object]] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        hit = self._entries.get(key)
        if hit is None:
            return None
        deadline, value = hit
        if self.clock() >= deadline:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        self._entries[key] = (self.clock() + ttl_seconds, value)
