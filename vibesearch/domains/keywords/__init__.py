"""
Keywords Domain - Vocabulary matching and vibe query enhancement.

This domain handles:
- Keyword matching against ambiance/time/occasion vocabularies
- Ambiance synonym expansion
- Location context extraction from notes
- Business-search parameter parsing
"""

from .enhancer import QueryEnhancer, apply_cafe_bias, extract_location_from_text
from .index import KeywordIndex
from .models import PlaceQuery, QueryBreakdown

__all__ = [
    "KeywordIndex",
    "QueryEnhancer",
    "PlaceQuery",
    "QueryBreakdown",
    "apply_cafe_bias",
    "extract_location_from_text",
]
