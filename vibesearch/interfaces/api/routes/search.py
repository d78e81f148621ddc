"""
Search Routes - Vibe search and query diagnostics endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from vibesearch.domains.keywords import QueryBreakdown
from vibesearch.domains.orchestration import SearchOrchestrator
from vibesearch.domains.ranking import LocationResult
from vibesearch.interfaces.api.deps import get_orchestrator

router = APIRouter()


class SearchRequest(BaseModel):
    """Search request body."""

    query: str = Field(..., min_length=1, description="Vibe query, e.g. 'cozy coffee'")
    notes: str = Field(default="", description="Surrounding note text")
    location: str = Field(default="", description="User location hint")


class SearchResponse(BaseModel):
    """Search response."""

    query: str
    contextual_query: str
    results: list[LocationResult]
    best_match: LocationResult | None
    total: int
    cache_hit: bool
    used_fallback: bool
    duration_ms: float


class EnhanceRequest(BaseModel):
    """Query enhancement request body."""

    query: str = Field(..., min_length=1)
    notes: str = ""
    location: str | None = None


@router.post("", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """
    Rank nearby places against a vibe query.

    - **query**: Free-form query text
    - **notes**: Note text used for location and keyword context
    - **location**: Location hint forwarded to the place provider
    """
    outcome = await orchestrator.run(
        request.query,
        notes=request.notes,
        location=request.location,
    )

    return SearchResponse(
        query=outcome.query,
        contextual_query=outcome.contextual_query,
        results=outcome.results,
        best_match=outcome.best_match,
        total=len(outcome.results),
        cache_hit=outcome.cache_hit,
        used_fallback=outcome.used_fallback,
        duration_ms=outcome.duration_ms,
    )


@router.post("/enhance", response_model=QueryBreakdown)
async def enhance(
    request: EnhanceRequest,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Show how a query is expanded before search."""
    return orchestrator.enhancer.breakdown(
        request.query,
        notes=request.notes,
        user_location=request.location,
    )


@router.get("/cache")
async def cache_stats(
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
) -> dict[str, Any]:
    """Result cache statistics."""
    return orchestrator.cache.stats()
