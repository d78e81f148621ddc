"""
API Dependencies - Dependency injection for FastAPI routes.

Provides the process-wide search orchestrator and its collaborators.
"""

from __future__ import annotations

from functools import lru_cache

from vibesearch.adapters.embeddings import SentenceTransformerOracle
from vibesearch.adapters.places import PlaceSearchClient
from vibesearch.config import Settings, get_settings
from vibesearch.domains.keywords import QueryEnhancer
from vibesearch.domains.orchestration import ResultCache, SearchOrchestrator
from vibesearch.domains.ranking import SimilarityRanker, SparseEncoder


def build_orchestrator(settings: Settings) -> SearchOrchestrator:
    """Wire an orchestrator from settings."""
    oracle = SentenceTransformerOracle(
        settings.embedding_model,
        timeout=settings.embedding_timeout_seconds,
        load_timeout=settings.model_load_timeout_seconds,
    )
    places = PlaceSearchClient(
        settings.place_search_url,
        path=settings.place_search_path,
        timeout=settings.place_search_timeout_seconds,
        max_retries=settings.place_search_max_retries,
    )
    ranker = SimilarityRanker(
        oracle,
        encoder=SparseEncoder(
            threshold=settings.sparsity_threshold,
            max_dimensions=settings.max_sparse_dimensions,
        ),
        top_k=settings.top_k,
        use_sparse=settings.use_sparse_similarity,
    )
    cache = ResultCache(
        max_size=settings.cache_max_size,
        context_ttl=settings.context_cache_ttl_seconds,
        notes_prefix_length=settings.notes_key_prefix_length,
    )
    return SearchOrchestrator(
        oracle,
        places,
        enhancer=QueryEnhancer(),
        ranker=ranker,
        cache=cache,
        candidate_limit=settings.candidate_limit,
        session_history_limit=settings.session_history_limit,
    )


@lru_cache
def get_orchestrator() -> SearchOrchestrator:
    """Get search orchestrator singleton."""
    return build_orchestrator(get_settings())


async def shutdown_orchestrator() -> None:
    """Close the singleton's HTTP client and forget it."""
    if get_orchestrator.cache_info().currsize == 0:
        return

    await get_orchestrator().place_search.close()
    get_orchestrator.cache_clear()


async def init_services() -> None:
    """
    Initialize services on startup.

    This should be called from the FastAPI lifespan handler.
    """
    orchestrator = get_orchestrator()
    if get_settings().preload_model:
        await orchestrator.initialize_model()


async def cleanup_services() -> None:
    """Cleanup services on shutdown."""
    await shutdown_orchestrator()
