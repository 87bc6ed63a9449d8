"""
SQLAlchemy Database Models for the Leitner System

Tables:
- leitner_cards: Flashcards and their current Leitner category

ARCHITECTURE NOTE:
    This file contains SQLALCHEMY models for database persistence.
    The domain object is the frozen `Card` dataclass in
    leitner/services/learning/card_store.py and the API schema lives in
    leitner/models/cards.py.

    Data flows: Router → Pydantic → Service → Card Store → SQLAlchemy → Database
"""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from leitner.db.base import Base
from leitner.enums import Category


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


class LeitnerCard(Base):
    """
    Flashcard row.

    Attributes:
        pk: Auto-incrementing primary key. Gives the insertion order used
            when listing cards.
        card_id: Public opaque identifier (UUID string) exposed over the API.
        question: Front side of the card.
        answer: Back side of the card.
        tag: Optional free-text label used for filtering.
        category: Leitner category token (FIRST ... SEVENTH, DONE).
        last_reviewed_at: Date of the most recent answer. Null for a card that
            has never been answered, which makes it due immediately.
        created_at: Row creation timestamp.
    """

    __tablename__ = "leitner_cards"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    card_id: Mapped[str] = mapped_column(String(36), unique=True, index=True)

    # Content
    question: Mapped[str] = mapped_column(Text)
    answer: Mapped[str] = mapped_column(Text)
    tag: Mapped[Optional[str]] = mapped_column(String(255), index=True)

    # Scheduling
    category: Mapped[str] = mapped_column(String(16), default=Category.FIRST.value)
    last_reviewed_at: Mapped[Optional[date]] = mapped_column(Date)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now
    )
