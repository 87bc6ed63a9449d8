"""
Learning System Enums

Defines the Leitner box categories and the card store backends.
"""

import math
from enum import Enum


class Category(str, Enum):
    """
    Leitner box a card currently sits in.

    Each category has a fixed review interval in days. A correct answer moves
    the card one box forward, a wrong answer sends it back to FIRST.

    State transitions:
    - FIRST → SECOND → THIRD → ... → SEVENTH → DONE (pass)
    - any non-DONE category → FIRST (fail)
    - DONE is terminal: the card has been learned and is never due again

    The string values are part of the HTTP contract and must not change.
    """

    FIRST = "FIRST"  # Every day
    SECOND = "SECOND"  # Every 2 days
    THIRD = "THIRD"  # Every 4 days
    FOURTH = "FOURTH"  # Every 8 days
    FIFTH = "FIFTH"  # Every 16 days
    SIXTH = "SIXTH"  # Every 32 days
    SEVENTH = "SEVENTH"  # Every 64 days
    DONE = "DONE"  # Learned, out of the rotation

    @classmethod
    def initial(cls) -> "Category":
        """Category of a freshly created (or failed) card."""
        return cls.FIRST

    @property
    def interval_days(self) -> float:
        """Review interval in days (``math.inf`` for DONE)."""
        return CATEGORY_INTERVALS[self]

    @property
    def rank(self) -> int:
        """Position in the box sequence, FIRST being 0."""
        return _CATEGORY_ORDER.index(self)

    @property
    def is_done(self) -> bool:
        return self is Category.DONE

    def next(self) -> "Category":
        """Category reached after a correct answer (DONE stays DONE)."""
        return _NEXT_CATEGORY[self]


CATEGORY_INTERVALS: dict[Category, float] = {
    Category.FIRST: 1,
    Category.SECOND: 2,
    Category.THIRD: 4,
    Category.FOURTH: 8,
    Category.FIFTH: 16,
    Category.SIXTH: 32,
    Category.SEVENTH: 64,
    Category.DONE: math.inf,
}

_CATEGORY_ORDER: list[Category] = list(Category)

_NEXT_CATEGORY: dict[Category, Category] = {
    Category.FIRST: Category.SECOND,
    Category.SECOND: Category.THIRD,
    Category.THIRD: Category.FOURTH,
    Category.FOURTH: Category.FIFTH,
    Category.FIFTH: Category.SIXTH,
    Category.SIXTH: Category.SEVENTH,
    Category.SEVENTH: Category.DONE,
    Category.DONE: Category.DONE,
}


class CardStoreBackend(str, Enum):
    """
    Persistence backend for cards.

    Selected with the CARD_STORE setting.
    """

    MEMORY = "memory"  # Process-local dict, lost on restart
    SQL = "sql"  # SQLAlchemy async engine (SQLite or PostgreSQL)
