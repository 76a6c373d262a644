"""Small in-memory cache with per-entry insertion time and TTL."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Hashable, TypeVar

V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    value: V
    inserted_at: float

    def age(self, now: float) -> float:
        return now - self.inserted_at


class TTLCache(Generic[V]):
    """Key/value cache whose entries go stale after ``ttl_seconds``.

    Without ``max_entries``, stale entries are kept until overwritten or
    invalidated, so callers can still ``peek()`` at them when a fresh value
    cannot be computed. With ``max_entries``, every insert first drops the
    stale entries, then the oldest ones until the bound holds.
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int | None = None,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[Hashable, CacheEntry[V]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def is_fresh(self, key: Hashable) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.age(self._clock()) < self.ttl_seconds

    def get(self, key: Hashable) -> V | None:
        """Return the value only if it is younger than the TTL."""
        if self.is_fresh(key):
            return self._entries[key].value
        return None

    def peek(self, key: Hashable) -> V | None:
        """Return the value regardless of age."""
        entry = self._entries.get(key)
        return entry.value if entry is not None else None

    def age_seconds(self, key: Hashable) -> float | None:
        entry = self._entries.get(key)
        return entry.age(self._clock()) if entry is not None else None

    def set(self, key: Hashable, value: V) -> None:
        self._entries.pop(key, None)
        if self.max_entries is not None:
            self.purge_expired()
            # dicts keep insertion order, so the first key is the oldest
            while self._entries and len(self._entries) >= self.max_entries:
                del self._entries[next(iter(self._entries))]
        self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

    def purge_expired(self) -> int:
        """Drop every stale entry; return how many were removed."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.age(now) >= self.ttl_seconds]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def invalidate(self, key: Hashable | None = None) -> None:
        """Drop one entry, or all of them when ``key`` is None."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def get_or_compute(self, key: Hashable, factory: Callable[[], V]) -> V:
        """Return the fresh value, computing and storing it on a miss."""
        cached = self.get(key)
        if cached is not None:
            return cached
        value = factory()
        self.set(key, value)
        return value

    async def aget_or_compute(
        self, key: Hashable, factory: Callable[[], Awaitable[V]]
    ) -> V:
        """Async variant of :meth:`get_or_compute`. Exceptions are not cached."""
        cached = self.get(key)
        if cached is not None:
            return cached
        value = await factory()
        self.set(key, value)
        return value
