"""
Health check endpoint.
"""

from fastapi import APIRouter

from ..event_bus import get_event_bus
from ..state import get_engine


router = APIRouter()


@router.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    engine = get_engine()
    return {
        "status": "ok",
        "engine_configured": engine is not None,
        "interactive": get_event_bus().has_subscribers,
    }
