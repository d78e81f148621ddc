"""
Keyword Models - Data types for query enhancement.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PlaceQuery(BaseModel):
    """Business-search parameters derived from a query and its notes."""

    location: str = ""
    category: str = ""
    search_term: str = ""

    model_config = {"frozen": True}


class QueryBreakdown(BaseModel):
    """Every enhancement stage for one query, for diagnostics."""

    query: str
    ambiance_terms: str = ""
    location_context: str = ""
    keywords: list[str] = Field(default_factory=list)
    contextual_query: str = ""
    place_query: PlaceQuery = Field(default_factory=PlaceQuery)
