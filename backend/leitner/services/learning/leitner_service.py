"""
Leitner Service

Service layer that runs the Leitner scheduler against a card store.
Handles card creation and lookup, the daily quiz and answer processing.

Usage:
    from leitner.services.learning import LeitnerService, InMemoryCardStore

    service = LeitnerService(InMemoryCardStore())

    card = await service.create_card(CardCreate(question="2+2?", answer="4"))
    quiz = await service.due_cards(as_of=date.today())
    card = await service.record_answer(card.id, is_valid=True, today=date.today())
"""

import logging
from collections.abc import Iterable
from datetime import date
from typing import Optional

from leitner.middleware.error_handling import ValidationError
from leitner.models.cards import CardCreate
from leitner.services.learning.card_store import Card, CardStore
from leitner.services.learning.leitner import LeitnerScheduler, create_scheduler

logger = logging.getLogger(__name__)


class LeitnerService:
    """
    Use cases of the Leitner trainer.

    Provides:
    - Card creation, listing (with tag filter) and lookup
    - Due card query for a given date
    - Answer processing through the Leitner state machine

    Errors raised by the card store (NotFoundError, StoreError,
    ValidationError) propagate unchanged. Nothing is retried here.
    """

    def __init__(self, store: CardStore, scheduler: LeitnerScheduler = None):
        """
        Initialize the service.

        Args:
            store: Card store backend
            scheduler: Leitner scheduler (defaults to create_scheduler())
        """
        self.store = store
        self.scheduler = scheduler or create_scheduler()

    async def create_card(self, card_data: CardCreate) -> Card:
        """
        Create a new card.

        The card starts in category FIRST and is due immediately.

        Raises:
            ValidationError: If question or answer is blank
        """
        card = await self.store.create(
            question=card_data.question,
            answer=card_data.answer,
            tag=card_data.tag,
        )
        logger.info(f"Created card {card.id} (tag={card.tag!r})")
        return card

    async def list_cards(self, tags: Optional[Iterable[str]] = None) -> list[Card]:
        """List all cards, or only those whose tag is one of `tags`."""
        return await self.store.list(tags)

    async def get_card(self, card_id: str) -> Card:
        """
        Get a card by id.

        Raises:
            NotFoundError: If the card does not exist
        """
        _check_card_id(card_id)
        return await self.store.get(card_id)

    async def due_cards(self, as_of: date) -> list[Card]:
        """
        Get the quiz for a date.

        Returns every card due on `as_of`, lower categories first, then
        never-reviewed cards, then the oldest review, then id.
        """
        cards = await self.store.list()
        due = self.scheduler.due_cards(cards, as_of)
        logger.info(f"Quiz for {as_of.isoformat()}: {len(due)}/{len(cards)} cards due")
        return due

    async def record_answer(self, card_id: str, is_valid: bool, today: date) -> Card:
        """
        Record an answer to a card.

        A correct answer moves the card to the next category, a wrong one back
        to FIRST. Either way the card's last review date becomes `today`.
        The change is applied as a single atomic store update.

        Args:
            card_id: Card being answered
            is_valid: Whether the answer was correct
            today: Date of the answer

        Returns:
            The updated card

        Raises:
            NotFoundError: If the card does not exist (store left untouched)
            StoreError: If the update could not be persisted
        """
        _check_card_id(card_id)

        card = await self.store.update(
            card_id,
            lambda current: self.scheduler.answer(current, is_valid, today),
        )

        logger.info(
            f"Answered card {card.id}: {'pass' if is_valid else 'fail'}, "
            f"now {card.category.value}"
        )
        return card


def _check_card_id(card_id: str) -> None:
    if card_id is None or not card_id.strip():
        raise ValidationError("Card ID is required")
