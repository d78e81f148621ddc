"""
CLI Interface - Command-line tools for VibeSearch.

Provides commands for:
- Vibe searches against the place provider
- Query enhancement diagnostics
- Running the API server
"""

from .main import app, main

__all__ = ["app", "main"]
