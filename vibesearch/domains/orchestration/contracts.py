"""
Orchestration Contracts - Interfaces for orchestration domain.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from vibesearch.domains.ranking.models import LocationResult

from .models import CacheEntry


@runtime_checkable
class PlaceSearch(Protocol):
    """Contract for candidate place providers."""

    async def search(
        self,
        query: str,
        location: str = "",
        notes: str = "",
    ) -> list[LocationResult]:
        """
        Fetch candidate places.

        Args:
            query: Search text
            location: User location hint
            notes: Surrounding note text

        Returns:
            Places in provider order
        """
        ...

    async def close(self) -> None:
        """Release connections."""
        ...


@runtime_checkable
class ResultStore(Protocol):
    """Contract for ranked-result caching."""

    async def get(self, key: str, ttl_seconds: float | None = None) -> CacheEntry | None:
        """Get a live entry, or None."""
        ...

    async def set(self, key: str, results: Sequence[LocationResult]) -> CacheEntry:
        """Store ranked results."""
        ...

    async def clear(self) -> None:
        """Drop all entries."""
        ...
