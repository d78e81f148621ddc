"""
Places Adapter - Business-search HTTP client.
"""

from .client import PlaceSearchClient, map_business

__all__ = ["PlaceSearchClient", "map_business"]
