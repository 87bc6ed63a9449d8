"""
API-related enums.

Defines enums for rate limiting and other API concerns.
"""

from enum import Enum


class RateLimitType(str, Enum):
    """
    Rate limit categories for different endpoint types.

    Each category has a corresponding rate limit configured in settings.
    Usage:
        from leitner.enums import RateLimitType
        from leitner.config import settings

        limit = settings.get_rate_limit(RateLimitType.ANSWER)
    """

    # Card browsing, creation and quiz queries
    DEFAULT = "default"

    # Answer submissions (writes to the card store)
    ANSWER = "answer"
