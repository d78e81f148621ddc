"""
Sparse Encoder - Compress dense embeddings to their strongest components.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from .models import SparseEmbedding

logger = logging.getLogger(__name__)

__all__ = ["SparseEncoder", "normalize", "DEFAULT_SPARSITY_THRESHOLD", "DEFAULT_MAX_DIMENSIONS"]

DEFAULT_SPARSITY_THRESHOLD = 1e-3
DEFAULT_MAX_DIMENSIONS = 100


def normalize(vector: Sequence[float] | np.ndarray) -> np.ndarray:
    """L2-normalize a vector; the zero vector is returned unchanged."""
    array = np.asarray(vector, dtype=np.float64).ravel()
    norm = float(np.linalg.norm(array))
    if norm == 0.0:
        return array
    return array / norm


class SparseEncoder:
    """
    Keeps the top-N components of a dense vector by absolute value.

    Example:
        >>> encoder = SparseEncoder(max_dimensions=2)
        >>> encoder.create_sparse_embedding([0.1, -0.9, 0.0, 0.4]).indices
        [1, 3]
    """

    def __init__(
        self,
        threshold: float = DEFAULT_SPARSITY_THRESHOLD,
        max_dimensions: int = DEFAULT_MAX_DIMENSIONS,
    ) -> None:
        """
        Initialize encoder.

        Args:
            threshold: Components with abs value <= threshold are dropped
            max_dimensions: Maximum number of retained components
        """
        if max_dimensions < 1:
            raise ValueError("max_dimensions must be positive")
        self.threshold = threshold
        self.max_dimensions = max_dimensions

    def create_sparse_embedding(self, dense: Sequence[float] | np.ndarray) -> SparseEmbedding:
        """
        Encode a dense vector.

        Indices come back ordered by descending magnitude, not by position.
        """
        array = np.asarray(dense, dtype=np.float64).ravel()
        magnitude = float(np.linalg.norm(array))

        absolute = np.abs(array)
        survivors = np.flatnonzero(absolute > self.threshold)
        # stable sort keeps lower positions first among equal magnitudes
        order = survivors[np.argsort(-absolute[survivors], kind="stable")]
        kept = order[: self.max_dimensions]

        embedding = SparseEmbedding(
            indices=[int(i) for i in kept],
            values=[float(array[i]) for i in kept],
            dimension=int(array.size),
            magnitude=magnitude,
        )

        logger.debug(
            "Sparse encoding: %d -> %d components (threshold=%g)",
            array.size,
            len(embedding),
            self.threshold,
        )
        return embedding
