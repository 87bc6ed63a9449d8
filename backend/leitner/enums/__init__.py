"""
Centralized enum definitions for the application.

All enums are organized by domain:
- learning.py: Leitner categories, card store backends
- api.py: Rate limit categories

Usage:
    from leitner.enums import Category, RateLimitType

    # Or import from specific module
    from leitner.enums.learning import Category
"""

from leitner.enums.api import RateLimitType
from leitner.enums.learning import CATEGORY_INTERVALS, CardStoreBackend, Category

__all__ = [
    # Learning enums
    "Category",
    "CATEGORY_INTERVALS",
    "CardStoreBackend",
    # API enums
    "RateLimitType",
]
