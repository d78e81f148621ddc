"""
Embeddings Adapter - Sentence-transformers embedding oracle.
"""

from .oracle import ModelState, SentenceTransformerOracle

__all__ = ["ModelState", "SentenceTransformerOracle"]
