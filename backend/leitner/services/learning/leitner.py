"""
Leitner Scheduler

Pure decision logic of the Leitner system: which cards are due on a given
day, and which category a card moves to after an answer.

Key Concepts:
- Category: one of eight boxes, FIRST ... SEVENTH then DONE
- Interval: days between reviews, 1, 2, 4, ... 64 (DONE: never)
- Due: never reviewed, or at least `interval` days since the last answer

Leitner State Machine:
    FIRST --pass--> SECOND --pass--> ... --pass--> SEVENTH --pass--> DONE
      ^_____________________ fail (from any box) _____________________|

The scheduler never reads a clock. Callers pass the date explicitly, so the
same inputs always produce the same output.

Usage:
    from leitner.services.learning.leitner import create_scheduler

    scheduler = create_scheduler()

    quiz = scheduler.due_cards(cards, as_of=date(2024, 3, 1))
    card = scheduler.answer(card, is_valid=True, today=date(2024, 3, 1))
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import date

from leitner.enums import Category
from leitner.services.learning.card_store import Card

logger = logging.getLogger(__name__)


def next_category(category: Category, is_valid: bool) -> Category:
    """
    Category reached from `category` after an answer.

    A correct answer moves one box forward (DONE stays DONE). A wrong answer
    always goes back to FIRST, whatever the current box.
    """
    if is_valid:
        return category.next()
    return Category.initial()


def due_order_key(card: Card) -> tuple:
    """
    Sort key for due cards.

    Lower categories first, then never-reviewed cards, then the oldest
    review, then id so that the order is total.
    """
    reviewed = card.last_reviewed_at is not None
    return (
        card.category.rank,
        reviewed,
        card.last_reviewed_at or date.min,
        card.id,
    )


class LeitnerScheduler:
    """
    Leitner scheduler.

    Stateless: every method is a function of its arguments.
    """

    def is_due(self, card: Card, as_of: date) -> bool:
        """
        Check whether a card has to be reviewed on `as_of`.

        DONE cards are never due. Cards that were never answered are always
        due. Otherwise the card is due once its category's interval has
        elapsed since the last answer.
        """
        if card.category.is_done:
            return False

        if card.last_reviewed_at is None:
            return True

        days_since_review = (as_of - card.last_reviewed_at).days
        return days_since_review >= card.category.interval_days

    def due_cards(self, cards: Iterable[Card], as_of: date) -> list[Card]:
        """
        Keep the cards due on `as_of`, most behind first.

        Args:
            cards: Candidate cards (any order)
            as_of: Quiz date

        Returns:
            Due cards sorted by `due_order_key`
        """
        due = [card for card in cards if self.is_due(card, as_of)]
        due.sort(key=due_order_key)
        return due

    def answer(self, card: Card, is_valid: bool, today: date) -> Card:
        """
        Apply an answer to a card.

        Args:
            card: Card being answered
            is_valid: Whether the answer was correct
            today: Date of the answer, stored as `last_reviewed_at`

        Returns:
            New card value with the next category and review date
        """
        category = next_category(card.category, is_valid)

        logger.debug(
            f"Card {card.id}: {card.category.value} -> {category.value} "
            f"({'pass' if is_valid else 'fail'})"
        )

        return replace(card, category=category, last_reviewed_at=today)


def create_scheduler() -> LeitnerScheduler:
    """Create a scheduler."""
    return LeitnerScheduler()
