"""
Orchestration Models - Data types for the search pipeline.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from vibesearch.domains.ranking.models import LocationResult, SparseEmbedding


class SearchState(str, Enum):
    """Pipeline stages of one search invocation."""

    IDLE = "idle"
    ENHANCING = "enhancing"
    EMBEDDING = "embedding"
    FETCHING_CANDIDATES = "fetching_candidates"
    RANKING = "ranking"
    FALLBACK_RETRY = "fallback_retry"
    RERANKING = "reranking"
    DONE = "done"
    EMPTY = "empty"


class CacheEntry(BaseModel):
    """Ranked results stored under one cache key."""

    key: str
    results: tuple[LocationResult, ...]
    timestamp: float

    model_config = {"frozen": True}


class SearchSession(BaseModel):
    """Audit record of one search invocation."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    query: str
    embeddings: list[SparseEmbedding] = Field(default_factory=list)
    clusters: list[str] = Field(default_factory=list)
    results: list[LocationResult] = Field(default_factory=list)

    model_config = {"frozen": True}


class SearchOutcome(BaseModel):
    """Result of one orchestrator invocation."""

    sequence_id: int
    query: str
    contextual_query: str = ""
    results: list[LocationResult] = Field(default_factory=list)
    state: SearchState = SearchState.EMPTY
    stages: list[SearchState] = Field(default_factory=list)
    cache_hit: bool = False
    used_fallback: bool = False
    stale: bool = False
    duration_ms: float = 0.0

    @property
    def best_match(self) -> LocationResult | None:
        return self.results[0] if self.results else None
