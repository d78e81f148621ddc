"""
Query Enhancer - Ambiance expansion and context extraction for vibe queries.

Features:
- Ambiance synonym expansion with a cafe bias for coziness words
- Location context from trip notes ("trip: sf jun 1-3")
- Keyword pull from surrounding notes
- Business-search parameter parsing (location, category, search term)

All operations are pure string functions; nothing here performs I/O.
"""

from __future__ import annotations

import logging
import re

from .index import KeywordIndex
from .models import PlaceQuery, QueryBreakdown
from .vocabulary import (
    AMBIANCE_MAP,
    CAFE_BIAS_SUFFIX,
    CAFE_TERMS,
    CATEGORY_MAP,
    CITY_PATTERNS,
    COZY_TRIGGERS,
    EXPLICIT_CATEGORY_TERMS,
    LOCATION_MAP,
    LOCATION_PATTERNS,
)

logger = logging.getLogger(__name__)

__all__ = [
    "QueryEnhancer",
    "apply_cafe_bias",
    "extract_location_from_text",
]

_TRIP_PREFIX = re.compile(r"^\s*trip:\s*", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_EXPLICIT_CATEGORY_PATTERNS = [
    re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE) for term in EXPLICIT_CATEGORY_TERMS
]

MAX_NOTE_KEYWORDS = 3
MIN_SEARCH_TERM_LENGTH = 3


def apply_cafe_bias(tokens: list[str]) -> bool:
    """
    Decide whether a query should be nudged toward cafe-type venues.

    True when a coziness word appears and no cafe word does. This is a narrow
    heuristic for the "cozy spot" family of queries and is not applied to the
    wider keyword vocabulary.
    """
    token_set = set(tokens)
    return bool(token_set & COZY_TRIGGERS) and not token_set & CAFE_TERMS


def extract_location_from_text(text: str, user_location: str | None = None) -> str:
    """
    Find a city alias in free text for the business-search location.

    Falls back to the user's own location, then to an empty string.
    """
    if text:
        for pattern, display_name in CITY_PATTERNS:
            if pattern.search(text):
                return display_name
    return user_location or ""


class QueryEnhancer:
    """
    Expands raw vibe queries into richer search text.

    Example:
        >>> enhancer = QueryEnhancer()
        >>> enhancer.extract_location_context("trip: sf jun 1-3")
        'San Francisco, CA'
        >>> enhancer.enhance_query_with_keywords("quiet place to work", "trip: nyc")
        'quiet peaceful serene calm tranquil place to work laptop wifi quiet productive New York, NY'
    """

    def __init__(self, keyword_index: KeywordIndex | None = None) -> None:
        """
        Initialize enhancer.

        Args:
            keyword_index: Vocabulary used to pull keywords from notes
        """
        self._keywords = keyword_index or KeywordIndex()

    @property
    def keyword_index(self) -> KeywordIndex:
        return self._keywords

    def extract_location_context(self, notes: str) -> str:
        """
        Extract a canonical city name from note text.

        Patterns are tried in order (trip-prefixed name, full name,
        abbreviation); the first match is mapped to its display name, or
        returned as written when no mapping exists. Returns "" when no city is
        mentioned.
        """
        if not notes:
            return ""

        for pattern in LOCATION_PATTERNS:
            match = pattern.search(notes)
            if not match:
                continue

            raw = _TRIP_PREFIX.sub("", match.group(0)).strip()
            lookup = _WHITESPACE.sub(" ", raw.lower())
            return LOCATION_MAP.get(lookup, raw)

        return ""

    def extract_ambiance_terms(self, query: str) -> str:
        """
        Expand ambiance words into their synonym groups.

        Tokens without an expansion pass through unchanged. Coziness words
        without an explicit cafe word get "coffee cafe" appended.
        """
        tokens = query.split()
        expanded: list[str] = []
        for token in tokens:
            synonyms = AMBIANCE_MAP.get(token.lower())
            expanded.append(" ".join(synonyms) if synonyms else token)

        if apply_cafe_bias([token.lower() for token in tokens]):
            expanded.append(CAFE_BIAS_SUFFIX)

        return " ".join(expanded)

    def enhance_query_with_keywords(self, query: str, notes: str = "") -> str:
        """Combine ambiance expansion, location context, and note keywords."""
        keywords = self._keywords.find_keywords(notes)[:MAX_NOTE_KEYWORDS]
        parts = [
            self.extract_ambiance_terms(query),
            self.extract_location_context(notes),
            " ".join(keywords),
        ]
        return " ".join(part for part in parts if part).strip()

    # --- Business-search parameters ---

    def extract_category(self, query: str, notes: str = "") -> str:
        """
        Map a query to a business-search category.

        Exact query tokens win, then substrings of the query, then substrings
        of the notes.
        """
        query_lower = query.lower()
        for word in query_lower.split():
            if word in CATEGORY_MAP:
                return CATEGORY_MAP[word]

        for term, category in CATEGORY_MAP.items():
            if term in query_lower:
                return category

        notes_lower = notes.lower()
        if notes_lower:
            for term, category in CATEGORY_MAP.items():
                if term in notes_lower:
                    return category

        return ""

    def clean_search_terms(self, query: str) -> str:
        """
        Strip city names and explicit category words from a query.

        Descriptive words are kept. A result shorter than three characters
        falls back to the original query.
        """
        term = query
        for pattern, _ in CITY_PATTERNS:
            term = pattern.sub("", term)
        for pattern in _EXPLICIT_CATEGORY_PATTERNS:
            term = pattern.sub("", term)

        term = _WHITESPACE.sub(" ", term).strip()
        if len(term) < MIN_SEARCH_TERM_LENGTH:
            return query
        return term

    def parse_place_query(
        self,
        query: str,
        notes: str = "",
        user_location: str | None = None,
    ) -> PlaceQuery:
        """Derive business-search location, category, and term."""
        location = ""
        if notes:
            location = extract_location_from_text(notes, user_location)
        if not location:
            location = extract_location_from_text(query, user_location)

        place_query = PlaceQuery(
            location=location,
            category=self.extract_category(query, notes),
            search_term=self.clean_search_terms(query),
        )
        logger.debug(
            "Parsed place query: location=%s category=%s term='%s'",
            place_query.location,
            place_query.category,
            place_query.search_term,
        )
        return place_query

    def breakdown(
        self,
        query: str,
        notes: str = "",
        user_location: str | None = None,
    ) -> QueryBreakdown:
        """Run every enhancement stage and report each output."""
        return QueryBreakdown(
            query=query,
            ambiance_terms=self.extract_ambiance_terms(query),
            location_context=self.extract_location_context(notes),
            keywords=self._keywords.find_keywords(notes)[:MAX_NOTE_KEYWORDS],
            contextual_query=self.enhance_query_with_keywords(query, notes),
            place_query=self.parse_place_query(query, notes, user_location),
        )
