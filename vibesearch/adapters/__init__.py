"""
Adapters - External service integrations.
"""

from .embeddings import ModelState, SentenceTransformerOracle
from .places import PlaceSearchClient, map_business

__all__ = [
    "ModelState",
    "SentenceTransformerOracle",
    "PlaceSearchClient",
    "map_business",
]
