"""
FastAPI Dependencies

Common dependencies for the card store, the Leitner service and the clock.

The store is created once per process (in the app lifespan) and kept on
`app.state`; tests replace it with `app.dependency_overrides[get_card_store]`.
"""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from fastapi import Depends, Request

from leitner.config import settings
from leitner.services.learning import CardStore, LeitnerService


def get_card_store(request: Request) -> CardStore:
    """Card store configured at startup."""
    return request.app.state.card_store


def get_leitner_service(
    store: CardStore = Depends(get_card_store),
) -> LeitnerService:
    """Get Leitner service."""
    return LeitnerService(store)


def get_today() -> date:
    """
    Today's date in the configured TIMEZONE.

    Used both as the default quiz date and as the review date stamped on
    answered cards.
    """
    if settings.TIMEZONE.upper() == "UTC":
        tz = timezone.utc
    else:
        tz = ZoneInfo(settings.TIMEZONE)
    return datetime.now(tz).date()
