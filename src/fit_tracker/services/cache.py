"""TTL cache used for remote food lookups."""

import time
from dataclasses import dataclass, field
from typing import Protocol


class Cache(Protocol):
    """Cache interface for lookup results."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ``ttl_seconds``."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: float


@dataclass
class InMemoryCache(Cache):
    """Process-local cache bounded by entry count.

    When full, the entry closest to expiry is dropped first.
    """

    max_entries: int = 512
    _entries: dict[str, _CacheEntry] = field(default_factory=dict, init=False)

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if time.monotonic() >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        if key not in self._entries and len(self._entries) >= self.max_entries:
            oldest = min(self._entries, key=lambda k: self._entries[k].expires_at)
            self._entries.pop(oldest, None)
        self._entries[key] = _CacheEntry(
            value=value, expires_at=time.monotonic() + ttl_seconds
        )

    def __len__(self) -> int:
        return len(self._entries)
