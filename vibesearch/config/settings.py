"""
Settings - Application configuration using Pydantic Settings.

Loads from environment variables and .env files.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Embedding oracle
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    embedding_dimension: int = 384
    embedding_timeout_seconds: float = 30.0
    model_load_timeout_seconds: float = 300.0
    preload_model: bool = False

    # Place search collaborator (the app's /api/locations proxy)
    place_search_url: str = "http://localhost:3000"
    place_search_path: str = "/api/locations"
    place_search_timeout_seconds: float = 10.0
    place_search_max_retries: int = 3

    # Ranking
    candidate_limit: int = 10
    top_k: int = 5
    sparsity_threshold: float = 1e-3
    max_sparse_dimensions: int = 100
    use_sparse_similarity: bool = True

    # Cache
    cache_max_size: int = 50
    context_cache_ttl_seconds: float = 300.0
    notes_key_prefix_length: int = 100
    session_history_limit: int = 100

    # Logging
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VIBESEARCH_",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
