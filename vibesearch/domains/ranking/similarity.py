"""
Similarity - Cosine similarity over dense and sparse embeddings.

Both functions clamp to [0, 1]. Comparing embeddings of different dimension
is logged and scored 0 so a single bad vector cannot abort a ranking.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from vibesearch.config.errors import DimensionMismatchError

from .models import SparseEmbedding

logger = logging.getLogger(__name__)

__all__ = ["cosine_similarity", "sparse_cosine_similarity", "clamp_unit"]


def clamp_unit(value: float) -> float:
    """Clamp to [0, 1]; NaN becomes 0."""
    if value != value:
        return 0.0
    return max(0.0, min(1.0, value))


def _dense_cosine(a: np.ndarray, b: np.ndarray) -> float:
    if a.shape != b.shape:
        raise DimensionMismatchError(a.size, b.size)

    denominator = float(np.linalg.norm(a) * np.linalg.norm(b))
    if denominator == 0.0:
        return 0.0
    return clamp_unit(float(np.dot(a, b)) / denominator)


def cosine_similarity(
    a: Sequence[float] | np.ndarray,
    b: Sequence[float] | np.ndarray,
) -> float:
    """Cosine similarity of two dense vectors."""
    left = np.asarray(a, dtype=np.float64).ravel()
    right = np.asarray(b, dtype=np.float64).ravel()
    try:
        return _dense_cosine(left, right)
    except DimensionMismatchError as e:
        logger.warning("Dense similarity skipped: %s", e.message)
        return 0.0


def sparse_cosine_similarity(a: SparseEmbedding, b: SparseEmbedding) -> float:
    """
    Cosine similarity of two sparse embeddings via a merge walk.

    The walk needs both index lists ascending; encoder output is ordered by
    magnitude, so operands are re-sorted first.
    """
    if a.dimension != b.dimension:
        logger.warning(
            "Sparse similarity skipped: %s",
            DimensionMismatchError(a.dimension, b.dimension).message,
        )
        return 0.0

    denominator = a.magnitude * b.magnitude
    if denominator == 0.0:
        return 0.0

    left = a.sorted_by_index()
    right = b.sorted_by_index()

    dot = 0.0
    i = j = 0
    while i < len(left.indices) and j < len(right.indices):
        li, rj = left.indices[i], right.indices[j]
        if li == rj:
            dot += left.values[i] * right.values[j]
            i += 1
            j += 1
        elif li < rj:
            i += 1
        else:
            j += 1

    return clamp_unit(dot / denominator)
