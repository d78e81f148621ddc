"""
Configuration - Application settings, error taxonomy, and logging setup.
"""

from .errors import (
    CandidateFetchError,
    DimensionMismatchError,
    EmbeddingError,
    EmptyQueryError,
    ErrorCode,
    ModelLoadError,
    SearchTimeoutError,
    VibeSearchError,
)
from .logging import configure_logging
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    # Errors
    "ErrorCode",
    "VibeSearchError",
    "EmptyQueryError",
    "ModelLoadError",
    "EmbeddingError",
    "DimensionMismatchError",
    "CandidateFetchError",
    "SearchTimeoutError",
]
