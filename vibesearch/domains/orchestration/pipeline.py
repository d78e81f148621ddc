"""
Search Pipeline - Orchestrates one vibe search through the domains.

Flow:
1. Validate the query
2. Check the result cache
3. Enhance the query with ambiance, location and note keywords
4. Embed, fetch candidates, rank
5. Fall back to the literal query when the contextual pass finds nothing
6. Re-rank the candidates against the literal query
7. Cache and return
"""

from __future__ import annotations

import itertools
import logging
import time
from collections import deque
from collections.abc import Sequence

import numpy as np

from vibesearch.config.errors import (
    CandidateFetchError,
    EmbeddingError,
    EmptyQueryError,
    SearchTimeoutError,
)
from vibesearch.domains.keywords.enhancer import QueryEnhancer
from vibesearch.domains.ranking.contracts import EmbeddingOracle, LoadableOracle
from vibesearch.domains.ranking.models import LocationResult, SparseEmbedding
from vibesearch.domains.ranking.ranker import SimilarityRanker
from vibesearch.domains.ranking.sparse import normalize

from .cache import ResultCache
from .contracts import PlaceSearch
from .models import SearchOutcome, SearchSession, SearchState

logger = logging.getLogger(__name__)

__all__ = ["SearchOrchestrator"]

# Failures that end one attempt with no results instead of failing the search
_ABSORBED_ERRORS = (CandidateFetchError, EmbeddingError, SearchTimeoutError)


class SearchOrchestrator:
    """
    Vibe search orchestrator.

    Coordinates:
    - Query enhancement from notes
    - Candidate retrieval
    - Embedding similarity ranking
    - Result caching and session history

    Example:
        >>> orchestrator = SearchOrchestrator(oracle, place_client)
        >>> best = await orchestrator.search_locations_with_context(
        ...     "quiet place to work", "trip: nyc jun 25-27"
        ... )
    """

    def __init__(
        self,
        oracle: EmbeddingOracle,
        place_search: PlaceSearch,
        enhancer: QueryEnhancer | None = None,
        ranker: SimilarityRanker | None = None,
        cache: ResultCache | None = None,
        candidate_limit: int = 10,
        session_history_limit: int = 100,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            oracle: Embedding provider
            place_search: Candidate place provider
            enhancer: Query enhancer (default vocabulary if None)
            ranker: Similarity ranker (built on the oracle if None)
            cache: Result cache
            candidate_limit: Candidates kept per fetch
            session_history_limit: Sessions kept for diagnostics
        """
        self._oracle = oracle
        self._places = place_search
        self._enhancer = enhancer or QueryEnhancer()
        self._ranker = ranker or SimilarityRanker(oracle)
        self._cache = cache or ResultCache()
        self._candidate_limit = candidate_limit
        self._sessions: deque[SearchSession] = deque(maxlen=session_history_limit)
        self._sequence = itertools.count(1)
        self._latest_sequence = 0

    @property
    def cache(self) -> ResultCache:
        return self._cache

    @property
    def enhancer(self) -> QueryEnhancer:
        return self._enhancer

    @property
    def ranker(self) -> SimilarityRanker:
        return self._ranker

    @property
    def oracle(self) -> EmbeddingOracle:
        return self._oracle

    @property
    def place_search(self) -> PlaceSearch:
        return self._places

    @property
    def sessions(self) -> list[SearchSession]:
        """Recent search sessions, oldest first."""
        return list(self._sessions)

    async def initialize_model(self) -> None:
        """
        Load the embedding model ahead of the first search.

        Raises:
            ModelLoadError: Loading failed
        """
        if isinstance(self._oracle, LoadableOracle):
            await self._oracle.initialize()

    async def search_locations(self, query: str) -> LocationResult | None:
        """Best match for a plain query, or None."""
        outcome = await self.run(query, use_context=False)
        return None if outcome.stale else outcome.best_match

    async def search_locations_with_context(
        self,
        query: str,
        notes: str,
    ) -> LocationResult | None:
        """Best match for a query enriched by its surrounding notes, or None."""
        outcome = await self.run(query, notes=notes, use_context=True)
        return None if outcome.stale else outcome.best_match

    async def run(
        self,
        query: str,
        notes: str = "",
        location: str = "",
        use_context: bool | None = None,
    ) -> SearchOutcome:
        """
        Run one search invocation.

        Args:
            query: User query
            notes: Surrounding note text
            location: User location hint passed to the place provider
            use_context: Use the TTL-bound context cache key (default: notes given)

        Returns:
            Search outcome with ranked results, best first

        Raises:
            ModelLoadError: The embedding model could not be loaded
        """
        start_time = time.time()
        sequence_id = next(self._sequence)
        self._latest_sequence = sequence_id
        if use_context is None:
            use_context = bool(notes)
        stages: list[SearchState] = [SearchState.IDLE]

        def finish(results: list[LocationResult], **fields: object) -> SearchOutcome:
            stages.append(SearchState.DONE if results else SearchState.EMPTY)
            stale = sequence_id != self._latest_sequence
            if stale:
                logger.info("Search #%d superseded by #%d", sequence_id, self._latest_sequence)
            return SearchOutcome(
                sequence_id=sequence_id,
                query=query,
                results=results,
                state=stages[-1],
                stages=stages,
                stale=stale,
                duration_ms=(time.time() - start_time) * 1000,
                **fields,
            )

        # Step 1: Validate
        try:
            self._validate(query)
        except EmptyQueryError:
            logger.debug("Ignoring empty query")
            return finish([])

        # Step 2: Check cache
        if use_context:
            cache_key = self._cache.context_key(query, notes)
            cached = await self._cache.get(cache_key, ttl_seconds=self._cache.context_ttl)
        else:
            cache_key = self._cache.basic_key(query)
            cached = await self._cache.get(cache_key)
        if cached is not None:
            return finish(list(cached.results), cache_hit=True)

        # Step 3: Enhance
        stages.append(SearchState.ENHANCING)
        contextual_query = self._enhancer.enhance_query_with_keywords(query, notes) or query
        logger.info("Search #%d: %r -> %r", sequence_id, query, contextual_query)

        # Step 4: Embed, fetch, rank
        embeddings: list[SparseEmbedding] = []
        candidates, ranked = await self._attempt(
            contextual_query, location, notes, embeddings, stages
        )

        # Step 5: Fallback to the literal query
        used_fallback = False
        if not ranked and contextual_query != query:
            logger.info("Search #%d: no contextual results, retrying with %r", sequence_id, query)
            stages.append(SearchState.FALLBACK_RETRY)
            used_fallback = True
            candidates, ranked = await self._attempt(query, location, notes, embeddings, stages)

        # Step 6: Re-rank against the literal query
        if ranked and not used_fallback and contextual_query != query:
            stages.append(SearchState.RERANKING)
            ranked = await self._rerank(query, candidates, ranked, embeddings)

        # Step 7: Cache and record
        if ranked:
            await self._cache.set(cache_key, ranked)

        self._sessions.append(
            SearchSession(
                query=query,
                embeddings=embeddings,
                clusters=self._enhancer.keyword_index.find_keywords(f"{query} {notes}"),
                results=ranked,
            )
        )

        return finish(ranked, contextual_query=contextual_query, used_fallback=used_fallback)

    @staticmethod
    def _validate(query: str) -> None:
        if not query or not query.strip():
            raise EmptyQueryError()

    async def _attempt(
        self,
        search_text: str,
        location: str,
        notes: str,
        embeddings: list[SparseEmbedding],
        stages: list[SearchState],
    ) -> tuple[list[LocationResult], list[LocationResult]]:
        """Embed, fetch and rank once. Returns (candidates, ranked)."""
        try:
            stages.append(SearchState.EMBEDDING)
            query_vector = await self._oracle.embed(search_text)
            embeddings.append(self._sparse(query_vector))

            stages.append(SearchState.FETCHING_CANDIDATES)
            candidates = await self._places.search(search_text, location=location, notes=notes)
            candidates = list(candidates)[: self._candidate_limit]
            logger.debug("Fetched %d candidates for %r", len(candidates), search_text)

            stages.append(SearchState.RANKING)
            ranked = await self._ranker.rank_by_similarity(query_vector, candidates)
        except _ABSORBED_ERRORS as e:
            logger.warning("Search attempt for %r failed: %s", search_text, e.message)
            return [], []

        return candidates, ranked

    async def _rerank(
        self,
        query: str,
        candidates: Sequence[LocationResult],
        ranked: list[LocationResult],
        embeddings: list[SparseEmbedding],
    ) -> list[LocationResult]:
        """Re-rank fetched candidates against the literal query; keep the first ranking on failure."""
        try:
            query_vector = await self._oracle.embed(query)
            embeddings.append(self._sparse(query_vector))
            reranked = await self._ranker.rank_by_similarity(query_vector, candidates)
        except _ABSORBED_ERRORS as e:
            logger.warning("Re-rank for %r failed, keeping contextual ranking: %s", query, e.message)
            return ranked

        return reranked or ranked

    def _sparse(self, vector: Sequence[float] | np.ndarray) -> SparseEmbedding:
        return self._ranker.encoder.create_sparse_embedding(normalize(vector))
