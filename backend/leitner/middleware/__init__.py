"""
Middleware Package

Provides FastAPI middleware for:
- Rate limiting
- Error handling

Rate limiting usage:
    from leitner.middleware import limiter
    from leitner.enums import RateLimitType
    from leitner.config import settings

    @limiter.limit(settings.get_rate_limit(RateLimitType.ANSWER))
    async def my_endpoint(request: Request):
        ...
"""

from leitner.middleware.error_handling import (
    ErrorHandlingMiddleware,
    NotFoundError,
    ServiceError,
    StoreError,
    ValidationError,
    setup_error_handling,
)
from leitner.middleware.rate_limit import get_rate_limit, limiter, setup_rate_limiting

__all__ = [
    "setup_rate_limiting",
    "limiter",
    "get_rate_limit",
    "ErrorHandlingMiddleware",
    "setup_error_handling",
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "StoreError",
]
