"""
Rate Limiting Middleware

Prevents abuse and ensures fair resource usage using SlowAPI.

Usage:
    from leitner.middleware.rate_limit import limiter
    from leitner.enums import RateLimitType
    from leitner.config import settings

    @router.patch("/{card_id}/answer")
    @limiter.limit(settings.get_rate_limit(RateLimitType.ANSWER))
    async def answer_card(request: Request, ...):
        ...

Rate limit configurations (from settings):
- DEFAULT: Card listing, creation and quiz queries (100/minute)
- ANSWER: Answer submissions (60/minute)
"""

import logging

from fastapi import FastAPI, Request
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from leitner.config import settings
from leitner.enums import RateLimitType

logger = logging.getLogger(__name__)


def get_client_identifier(request: Request) -> str:
    """
    Get client identifier for rate limiting.

    Uses X-Forwarded-For header if behind a proxy,
    otherwise falls back to direct IP address.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address or identifier
    """
    # Check for forwarded header (behind proxy/load balancer)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # Take the first IP in the chain (original client)
        return forwarded_for.split(",")[0].strip()

    # Fall back to direct client address
    return get_remote_address(request)


# Initialize limiter with default key function
limiter = Limiter(key_func=get_client_identifier, enabled=settings.RATE_LIMIT_ENABLED)


def setup_rate_limiting(app: FastAPI, enabled: bool = True) -> None:
    """
    Configure rate limiting on the FastAPI app.

    Args:
        app: FastAPI application instance
        enabled: Whether to enable rate limiting
    """
    if not enabled:
        logger.info("Rate limiting disabled")
        return

    # Store limiter in app state
    app.state.limiter = limiter

    # Add exception handler for rate limit exceeded
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Add middleware
    app.add_middleware(SlowAPIMiddleware)

    logger.info("Rate limiting enabled")


def get_rate_limit(rate_limit_type: RateLimitType) -> str:
    """
    Get rate limit string for an endpoint type.

    Args:
        rate_limit_type: RateLimitType enum value

    Returns:
        Rate limit string (e.g., "100/minute")
    """
    return settings.get_rate_limit(rate_limit_type)


def limit_default(func):
    """Decorator for card browsing and creation endpoints."""
    return limiter.limit(get_rate_limit(RateLimitType.DEFAULT))(func)


def limit_answer(func):
    """Decorator for answer submission endpoints."""
    return limiter.limit(get_rate_limit(RateLimitType.ANSWER))(func)
