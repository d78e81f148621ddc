"""
Error Taxonomy - Consistent error codes across the application.

Usage:
    from vibesearch.config.errors import ErrorCode, VibeSearchError

    raise CandidateFetchError("Place search returned 502", {"status": 502})
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error responses."""

    # Search errors
    SEARCH_EMPTY_QUERY = "SEARCH_EMPTY_QUERY"
    SEARCH_TIMEOUT = "SEARCH_TIMEOUT"
    CANDIDATE_FETCH_FAILED = "CANDIDATE_FETCH_FAILED"

    # Embedding errors
    MODEL_LOAD_FAILED = "MODEL_LOAD_FAILED"
    EMBEDDING_FAILED = "EMBEDDING_FAILED"
    EMBEDDING_DIMENSION_MISMATCH = "EMBEDDING_DIMENSION_MISMATCH"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


class VibeSearchError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to API-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class EmptyQueryError(VibeSearchError):
    """Blank or whitespace-only query."""

    def __init__(self, message: str = "Query is empty", details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.SEARCH_EMPTY_QUERY, message, details)


class ModelLoadError(VibeSearchError):
    """Embedding model failed to initialize."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.MODEL_LOAD_FAILED, message, details)


class EmbeddingError(VibeSearchError):
    """Embedding computation failed for a single call."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.EMBEDDING_FAILED, message, details)


class DimensionMismatchError(VibeSearchError):
    """Two embeddings being compared have different lengths."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(
            ErrorCode.EMBEDDING_DIMENSION_MISMATCH,
            f"Cannot compare embeddings of dimension {left} and {right}",
            {"left": left, "right": right},
        )


class CandidateFetchError(VibeSearchError):
    """Place search returned a non-success status or a malformed payload."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.CANDIDATE_FETCH_FAILED, message, details)


class SearchTimeoutError(VibeSearchError):
    """An oracle or place-search call exceeded its time budget."""

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(
            ErrorCode.SEARCH_TIMEOUT,
            f"{operation} timed out after {timeout:.1f}s",
            {"operation": operation, "timeout_seconds": timeout},
        )
