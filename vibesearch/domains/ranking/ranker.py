"""
Similarity Ranker - Order candidate places by semantic closeness to a query.

Each candidate is flattened to text, embedded through the oracle, normalized,
and compared to the normalized query embedding. Sparse comparison is the
default; dense comparison is available for exact scoring.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from .contracts import EmbeddingOracle
from .models import LocationResult
from .similarity import cosine_similarity, sparse_cosine_similarity
from .sparse import SparseEncoder, normalize

logger = logging.getLogger(__name__)

__all__ = ["SimilarityRanker"]


class SimilarityRanker:
    """
    Embedding-based candidate ranker.

    Example:
        >>> ranker = SimilarityRanker(oracle)
        >>> ranked = await ranker.rank_by_similarity(query_vector, places)
        >>> ranked[0].similarity_score
        0.82
    """

    def __init__(
        self,
        oracle: EmbeddingOracle,
        encoder: SparseEncoder | None = None,
        top_k: int = 5,
        use_sparse: bool = True,
    ) -> None:
        """
        Initialize ranker.

        Args:
            oracle: Embedding provider for candidate text
            encoder: Sparse encoder (default thresholds if None)
            top_k: Maximum number of ranked results
            use_sparse: Compare sparse encodings instead of dense vectors
        """
        self._oracle = oracle
        self._encoder = encoder or SparseEncoder()
        self._top_k = top_k
        self._use_sparse = use_sparse

    @property
    def encoder(self) -> SparseEncoder:
        return self._encoder

    def similarity(self, a: np.ndarray, b: np.ndarray) -> float:
        """Score two normalized dense vectors with the configured method."""
        if self._use_sparse:
            return sparse_cosine_similarity(
                self._encoder.create_sparse_embedding(a),
                self._encoder.create_sparse_embedding(b),
            )
        return cosine_similarity(a, b)

    async def rank_by_similarity(
        self,
        query_embedding: Sequence[float] | np.ndarray,
        candidates: Sequence[LocationResult],
    ) -> list[LocationResult]:
        """
        Rank candidates against a query embedding.

        Args:
            query_embedding: Dense query vector (normalized here)
            candidates: Places in retrieval order

        Returns:
            At most top_k places, best first, with similarity_score set.
            Equal scores keep retrieval order.
        """
        if not candidates:
            return []

        query_vector = normalize(query_embedding)

        scored: list[tuple[float, LocationResult]] = []
        for candidate in candidates:
            candidate_vector = normalize(await self._oracle.embed(candidate.to_text()))
            scored.append((self.similarity(query_vector, candidate_vector), candidate))

        # sorted() is stable, so ties keep candidate order
        scored = sorted(scored, key=lambda item: item[0], reverse=True)

        ranked = [candidate.with_score(score) for score, candidate in scored[: self._top_k]]

        logger.info(
            "Ranked %d candidates -> top %d (best=%.3f, mode=%s)",
            len(candidates),
            len(ranked),
            ranked[0].similarity_score or 0.0,
            "sparse" if self._use_sparse else "dense",
        )
        return ranked
