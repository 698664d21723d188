"""Key/value store whose entries expire a fixed time after insertion."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Hashable

from scoutwatch.systems.clock import Clock, monotonic_ms


@dataclass(frozen=True, slots=True)
class CacheEntry:
    value: Any
    expires_at: float


class ExpiringCache:
    """TTL cache for slowly-changing environment facts.

    Expiry is checked lazily on read; there is no background sweep.  A read
    past expiry returns None and evicts the stale entry.
    """

    __slots__ = ("_ttl_ms", "_clock", "_entries", "_lock")

    def __init__(self, ttl_ms: float, clock: Clock = monotonic_ms) -> None:
        self._ttl_ms = ttl_ms
        self._clock = clock
        self._entries: dict[Hashable, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_ms(self) -> float:
        return self._ttl_ms

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value, self._clock() + self._ttl_ms)

    def get(self, key: Hashable) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() > entry.expires_at:
                del self._entries[key]
                return None
            return entry.value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None
