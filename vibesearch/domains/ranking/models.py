"""
Ranking Models - Data types for embeddings and ranked places.
"""

from __future__ import annotations

import numpy as np
from pydantic import BaseModel, Field, model_validator


class LatLng(BaseModel):
    """Geographic coordinate."""

    lat: float = 0.0
    lng: float = 0.0

    model_config = {"frozen": True}


class Geometry(BaseModel):
    """Place geometry as returned by place search."""

    location: LatLng = Field(default_factory=LatLng)

    model_config = {"frozen": True}


class LocationResult(BaseModel):
    """A real-world place, optionally scored against a query."""

    place_id: str
    name: str
    description: str = ""
    formatted_address: str = ""
    geometry: Geometry = Field(default_factory=Geometry)
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    types: list[str] = Field(default_factory=list)
    similarity_score: float | None = Field(default=None, ge=0.0, le=1.0)

    model_config = {"frozen": True}

    def with_score(self, score: float) -> LocationResult:
        """Return a copy carrying a similarity score."""
        return self.model_copy(update={"similarity_score": score})

    def to_text(self) -> str:
        """Flatten the place into one text blob for embedding."""
        parts = [self.name, self.description, self.formatted_address]
        if self.types:
            parts.append(", ".join(self.types))
        if self.rating is not None:
            parts.append(f"rating {self.rating}")
        return " ".join(part for part in parts if part)


class SparseEmbedding(BaseModel):
    """
    Top-N compression of a dense embedding.

    ``magnitude`` is the L2 norm of the full dense vector, not of the retained
    subset, so cosine similarity keeps the original normalization.
    """

    indices: list[int]
    values: list[float]
    dimension: int = Field(..., ge=0)
    magnitude: float = Field(..., ge=0.0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_parallel(self) -> SparseEmbedding:
        if len(self.indices) != len(self.values):
            raise ValueError(
                f"indices and values differ in length: {len(self.indices)} != {len(self.values)}"
            )
        if any(i < 0 or i >= self.dimension for i in self.indices):
            raise ValueError("index out of range for dimension")
        return self

    def __len__(self) -> int:
        return len(self.indices)

    def sorted_by_index(self) -> SparseEmbedding:
        """Return a copy with indices ascending and values in lockstep."""
        if all(a < b for a, b in zip(self.indices, self.indices[1:])):
            return self
        pairs = sorted(zip(self.indices, self.values))
        return SparseEmbedding(
            indices=[i for i, _ in pairs],
            values=[v for _, v in pairs],
            dimension=self.dimension,
            magnitude=self.magnitude,
        )

    def to_dense(self) -> np.ndarray:
        """Decode into a zero-filled vector of the original dimension."""
        dense = np.zeros(self.dimension, dtype=np.float64)
        if self.indices:
            dense[self.indices] = self.values
        return dense
