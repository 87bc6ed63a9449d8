"""
Health Check Endpoints

Provides health check endpoints for monitoring and orchestration.

Endpoints:
- GET /api/health - Basic health check
- GET /api/health/ready - Readiness check (card store reachable)
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from leitner import __version__
from leitner.config import settings
from leitner.dependencies import get_card_store
from leitner.services.learning import CardStore

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check():
    """
    Basic health check.

    Returns a simple status response indicating the API is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check(store: CardStore = Depends(get_card_store)):
    """
    Readiness check.

    Lists the cards once to make sure the configured store answers and
    reports which backend served the request.
    """
    try:
        await store.list()
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "card_store": store.backend.value,
                "error": str(e),
            },
        )

    return {"status": "ready", "card_store": store.backend.value}
