"""
Health Routes - System health and status endpoints.
"""

from typing import Any

from fastapi import APIRouter

from vibesearch import __version__

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "vibesearch"}


@router.get("/api")
async def api_info() -> dict[str, Any]:
    """API info endpoint."""
    return {
        "name": "VibeSearch API",
        "version": __version__,
        "description": "Semantic place ranking for free-form vibe queries",
        "docs": "/docs",
    }
