"""
Ranking Contracts - Interfaces for ranking domain.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .models import LocationResult


@runtime_checkable
class EmbeddingOracle(Protocol):
    """Contract for text embedding providers."""

    async def embed(self, text: str) -> Sequence[float]:
        """
        Embed one text.

        Args:
            text: Input text

        Returns:
            Dense vector of fixed dimension, not necessarily normalized
        """
        ...


@runtime_checkable
class LoadableOracle(Protocol):
    """Oracles that can be warmed up before the first embed call."""

    async def initialize(self) -> None:
        """Load the underlying model."""
        ...


@runtime_checkable
class Ranker(Protocol):
    """Contract for place ranking implementations."""

    async def rank_by_similarity(
        self,
        query_embedding: Sequence[float],
        candidates: Sequence[LocationResult],
    ) -> list[LocationResult]:
        """Rank candidates against a query embedding."""
        ...
