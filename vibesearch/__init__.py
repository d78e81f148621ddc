"""
VibeSearch - Semantic "vibe" location ranking for note-taking apps.

Example:
    >>> from vibesearch.domains.orchestration import get_orchestrator
    >>> orchestrator = get_orchestrator()
    >>> place = await orchestrator.search_locations_with_context(
    ...     "quiet place to work", "trip: nyc jun 25-27"
    ... )
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
