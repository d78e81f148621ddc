"""
Result Cache - Bounded in-memory cache of ranked search results.

Eviction is first-in-first-out by insertion, tracked with an explicit key
queue; reads do not refresh an entry's position.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from collections.abc import Callable, Sequence
from typing import Any

from vibesearch.domains.ranking.models import LocationResult

from .models import CacheEntry

logger = logging.getLogger(__name__)

__all__ = ["ResultCache"]


class ResultCache:
    """
    FIFO-bounded result cache with optional per-read TTL.

    Two key schemes are used: ``basic_key`` for plain searches (read with no
    TTL) and ``context_key`` for searches with notes (read with the context
    TTL).

    Example:
        >>> cache = ResultCache(max_size=50)
        >>> await cache.set(cache.basic_key("Cozy Cafe"), results)
        >>> entry = await cache.get("cozy cafe")
    """

    def __init__(
        self,
        max_size: int = 50,
        context_ttl: float = 300.0,
        notes_prefix_length: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize cache.

        Args:
            max_size: Maximum number of entries before eviction
            context_ttl: TTL in seconds for context-keyed entries
            notes_prefix_length: Note characters included in context keys
            clock: Monotonic time source
        """
        if max_size < 1:
            raise ValueError("max_size must be positive")
        self._entries: dict[str, CacheEntry] = {}
        self._order: deque[str] = deque()
        self._lock = asyncio.Lock()
        self._max_size = max_size
        self._context_ttl = context_ttl
        self._notes_prefix_length = notes_prefix_length
        self._clock = clock
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def context_ttl(self) -> float:
        return self._context_ttl

    @staticmethod
    def basic_key(query: str) -> str:
        """Normalized query key."""
        return query.strip().lower()

    def context_key(self, query: str, notes: str) -> str:
        """Query plus a bounded note prefix."""
        return f"{self.basic_key(query)}|{notes[: self._notes_prefix_length]}"

    async def get(self, key: str, ttl_seconds: float | None = None) -> CacheEntry | None:
        """
        Get a cached entry.

        Args:
            key: Cache key
            ttl_seconds: Maximum entry age; None means no age limit

        Returns:
            The entry, or None on a miss or an expired entry
        """
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            if ttl_seconds is not None and self._clock() - entry.timestamp > ttl_seconds:
                self._remove(key)
                self._misses += 1
                logger.debug("Cache entry expired: %s", key[:32])
                return None

            self._hits += 1
            logger.debug("Cache hit: %s", key[:32])
            return entry

    async def set(self, key: str, results: Sequence[LocationResult]) -> CacheEntry:
        """Store ranked results, evicting the oldest key past capacity."""
        entry = CacheEntry(key=key, results=tuple(results), timestamp=self._clock())

        async with self._lock:
            if key in self._entries:
                self._order.remove(key)
            self._entries[key] = entry
            self._order.append(key)

            while len(self._entries) > self._max_size:
                oldest = self._order.popleft()
                del self._entries[oldest]
                self._evictions += 1
                logger.debug("Evicted oldest cache entry: %s", oldest[:32])

        logger.debug("Cached %d results: %s", len(entry.results), key[:32])
        return entry

    async def clear(self) -> None:
        """Clear all cache entries."""
        async with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._order.clear()
        logger.info("Cleared %d cache entries", count)

    def _remove(self, key: str) -> None:
        del self._entries[key]
        self._order.remove(key)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> list[str]:
        """Keys in eviction order, oldest first."""
        return list(self._order)

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        total = self._hits + self._misses
        return {
            "size": len(self._entries),
            "max_size": self._max_size,
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
            "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
        }
