"""
Keyword Index - Precomputed domain vocabulary for substring matching.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .vocabulary import VOCABULARY_SOURCES

__all__ = ["KeywordIndex"]


class KeywordIndex:
    """
    Deduplicated, order-preserving keyword vocabulary.

    Matching is a case-insensitive substring test against every keyword, so
    "cooler" matches "cool". Results come back in vocabulary order, which
    callers rely on when they keep only a prefix of the matches.

    Example:
        >>> KeywordIndex().find_keywords("Sunny brunch with friends")
        ['brunch', 'friends', 'sunny']
    """

    def __init__(self, sources: Iterable[Sequence[str]] = VOCABULARY_SOURCES) -> None:
        # dict keys keep first-seen order and drop duplicates
        merged: dict[str, None] = {}
        for source in sources:
            for keyword in source:
                merged.setdefault(keyword.lower(), None)
        self._keywords: tuple[str, ...] = tuple(merged)

    @property
    def keywords(self) -> tuple[str, ...]:
        """Vocabulary in enumeration order."""
        return self._keywords

    def __len__(self) -> int:
        return len(self._keywords)

    def find_keywords(self, text: str) -> list[str]:
        """Return every vocabulary keyword contained in text."""
        if not text:
            return []
        lower_text = text.lower()
        return [keyword for keyword in self._keywords if keyword in lower_text]
