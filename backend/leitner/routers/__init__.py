"""API Routers package."""

from leitner.routers import cards as cards_router
from leitner.routers import health as health_router

__all__ = ["cards_router", "health_router"]
