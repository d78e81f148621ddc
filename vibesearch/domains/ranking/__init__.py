"""
Ranking Domain - Embedding compression and similarity ranking.

This domain handles:
- Dense -> sparse embedding compression
- Dense and sparse cosine similarity
- Ranking candidate places against a query embedding
"""

from .contracts import EmbeddingOracle, LoadableOracle, Ranker
from .models import Geometry, LatLng, LocationResult, SparseEmbedding
from .ranker import SimilarityRanker
from .similarity import clamp_unit, cosine_similarity, sparse_cosine_similarity
from .sparse import SparseEncoder, normalize

__all__ = [
    # Contracts
    "EmbeddingOracle",
    "LoadableOracle",
    "Ranker",
    # Models
    "LatLng",
    "Geometry",
    "LocationResult",
    "SparseEmbedding",
    # Implementations
    "SparseEncoder",
    "SimilarityRanker",
    "normalize",
    "cosine_similarity",
    "sparse_cosine_similarity",
    "clamp_unit",
]
