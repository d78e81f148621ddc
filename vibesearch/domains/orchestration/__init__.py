"""
Orchestration Domain - Search pipeline coordination.

This domain handles:
- Result caching (FIFO bound, context TTL)
- Contextual search with literal-query fallback
- Re-ranking and best-match selection
- Search session history
"""

from .cache import ResultCache
from .contracts import PlaceSearch, ResultStore
from .models import CacheEntry, SearchOutcome, SearchSession, SearchState
from .pipeline import SearchOrchestrator

__all__ = [
    # Contracts
    "PlaceSearch",
    "ResultStore",
    # Models
    "CacheEntry",
    "SearchOutcome",
    "SearchSession",
    "SearchState",
    # Implementations
    "ResultCache",
    "SearchOrchestrator",
]
