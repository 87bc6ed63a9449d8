"""
Card Store

Durable record of every flashcard and its current Leitner category.

Two backends share the `CardStore` interface:
- InMemoryCardStore: process-local dict, used by default and in tests
- SqlCardStore: SQLAlchemy async sessions (SQLite via aiosqlite, PostgreSQL
  via asyncpg)

Concurrency:
    `update()` is a read-modify-write. Calls for the same card id are
    serialized through a per-id asyncio lock, so two answers submitted at the
    same time cannot lose one another. Different ids never wait on each other.
    The SQL backend also reads the row FOR UPDATE inside the transaction.

Usage:
    from leitner.services.learning.card_store import InMemoryCardStore

    store = InMemoryCardStore()
    card = await store.create("2+2?", "4", tag="math")
    card = await store.update(card.id, lambda c: replace(c, category=Category.SECOND))
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from leitner.config import Settings
from leitner.db.models_learning import LeitnerCard
from leitner.enums import CardStoreBackend, Category
from leitner.middleware.error_handling import NotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Card:
    """
    A flashcard and its scheduling state.

    Cards are immutable values; the store hands out a new instance on every
    change. Only `category` and `last_reviewed_at` ever change after creation.
    """

    id: str
    question: str
    answer: str
    tag: Optional[str] = None
    category: Category = Category.FIRST
    last_reviewed_at: Optional[date] = None  # None: never answered

    @property
    def is_done(self) -> bool:
        return self.category.is_done

    def check_answer(self, user_answer: Optional[str]) -> bool:
        """Compare a typed answer, ignoring case and surrounding whitespace."""
        if user_answer is None:
            return False
        return _normalize_answer(self.answer) == _normalize_answer(user_answer)


CardMutation = Callable[[Card], Card]


def _normalize_answer(text: str) -> str:
    return text.strip().lower()


def _normalize_tag(tag: Optional[str]) -> Optional[str]:
    if tag is None:
        return None
    return tag.strip() or None


def _merge_scheduling(current: Card, updated: Card) -> Card:
    """Keep identity and content from `current`, scheduling from `updated`."""
    return replace(
        current,
        category=Category(updated.category),
        last_reviewed_at=updated.last_reviewed_at,
    )


class KeyedLock:
    """
    One asyncio.Lock per key, created on demand.

    A key's lock is dropped once nobody holds or waits for it, so the
    registry only grows with the number of cards being updated concurrently.
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def acquire(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._users[key] = self._users.get(key, 0) + 1

        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


class CardStore(ABC):
    """
    Interface shared by all card store backends.

    Subclasses implement the raw persistence hooks; validation, id
    assignment and per-id locking live here.
    """

    backend: CardStoreBackend

    def __init__(self):
        self._locks = KeyedLock()

    async def create(
        self,
        question: str,
        answer: str,
        tag: Optional[str] = None,
    ) -> Card:
        """
        Store a new card in category FIRST, never reviewed.

        Raises:
            ValidationError: If question or answer is blank
        """
        if question is None or not question.strip():
            raise ValidationError("Question cannot be null or blank")
        if answer is None or not answer.strip():
            raise ValidationError("Answer cannot be null or blank")

        card = Card(
            id=str(uuid.uuid4()),
            question=question,
            answer=answer,
            tag=_normalize_tag(tag),
            category=Category.initial(),
            last_reviewed_at=None,
        )
        await self._insert(card)
        return card

    async def list(self, tags: Optional[Iterable[str]] = None) -> list[Card]:
        """
        List cards in insertion order.

        Args:
            tags: Exact, case-sensitive tag values to keep. Empty or None
                returns every card.
        """
        wanted = set(tags) if tags else set()
        return await self._select(wanted)

    async def get(self, card_id: str) -> Card:
        """
        Get a card by id.

        Raises:
            NotFoundError: If no card has that id
        """
        card = await self._fetch(card_id)
        if card is None:
            raise _not_found(card_id)
        return card

    async def update(self, card_id: str, mutation: CardMutation) -> Card:
        """
        Atomically apply `mutation` to a card's scheduling state.

        The mutation receives the current card and returns the desired one;
        only its `category` and `last_reviewed_at` are persisted. If the
        mutation raises, nothing is written.

        Raises:
            NotFoundError: If no card has that id
            StoreError: If the backend fails to persist the change
        """
        async with self._locks.acquire(card_id):
            return await self._apply(card_id, mutation)

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    @abstractmethod
    async def _insert(self, card: Card) -> None: ...

    @abstractmethod
    async def _select(self, tags: set[str]) -> list[Card]: ...

    @abstractmethod
    async def _fetch(self, card_id: str) -> Optional[Card]: ...

    @abstractmethod
    async def _apply(self, card_id: str, mutation: CardMutation) -> Card: ...


def _not_found(card_id: str) -> NotFoundError:
    return NotFoundError(f"Card {card_id} not found", details={"cardId": card_id})


class InMemoryCardStore(CardStore):
    """Card store backed by an insertion-ordered dict."""

    backend = CardStoreBackend.MEMORY

    def __init__(self):
        super().__init__()
        self._cards: dict[str, Card] = {}

    async def _insert(self, card: Card) -> None:
        self._cards[card.id] = card

    async def _select(self, tags: set[str]) -> list[Card]:
        if not tags:
            return list(self._cards.values())
        return [card for card in self._cards.values() if card.tag in tags]

    async def _fetch(self, card_id: str) -> Optional[Card]:
        return self._cards.get(card_id)

    async def _apply(self, card_id: str, mutation: CardMutation) -> Card:
        current = self._cards.get(card_id)
        if current is None:
            raise _not_found(card_id)

        updated = _merge_scheduling(current, mutation(current))
        self._cards[card_id] = updated
        return updated

    def __len__(self) -> int:
        return len(self._cards)


class SqlCardStore(CardStore):
    """
    Card store backed by SQLAlchemy async sessions.

    Every SQLAlchemy failure is re-raised as StoreError with the original
    exception chained.
    """

    backend = CardStoreBackend.SQL

    def __init__(self, session_maker: async_sessionmaker[AsyncSession] = None):
        super().__init__()
        if session_maker is None:
            from leitner.db.base import async_session_maker

            session_maker = async_session_maker
        self._session_maker = session_maker

    async def _insert(self, card: Card) -> None:
        row = LeitnerCard(
            card_id=card.id,
            question=card.question,
            answer=card.answer,
            tag=card.tag,
            category=card.category.value,
            last_reviewed_at=card.last_reviewed_at,
        )
        try:
            async with self._session_maker() as session:
                async with session.begin():
                    session.add(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to insert card {card.id}: {e}")
            raise StoreError(f"Could not store card: {type(e).__name__}") from e

    async def _select(self, tags: set[str]) -> list[Card]:
        query = select(LeitnerCard)
        if tags:
            query = query.where(LeitnerCard.tag.in_(sorted(tags)))
        query = query.order_by(LeitnerCard.pk.asc())

        try:
            async with self._session_maker() as session:
                result = await session.execute(query)
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list cards: {e}")
            raise StoreError(f"Could not list cards: {type(e).__name__}") from e

        return [self._to_card(row) for row in rows]

    async def _fetch(self, card_id: str) -> Optional[Card]:
        try:
            async with self._session_maker() as session:
                result = await session.execute(
                    select(LeitnerCard).where(LeitnerCard.card_id == card_id)
                )
                row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load card {card_id}: {e}")
            raise StoreError(f"Could not load card: {type(e).__name__}") from e

        return self._to_card(row) if row is not None else None

    async def _apply(self, card_id: str, mutation: CardMutation) -> Card:
        try:
            async with self._session_maker() as session:
                async with session.begin():
                    result = await session.execute(
                        select(LeitnerCard)
                        .where(LeitnerCard.card_id == card_id)
                        .with_for_update()
                    )
                    row = result.scalar_one_or_none()
                    if row is None:
                        raise _not_found(card_id)

                    current = self._to_card(row)
                    updated = _merge_scheduling(current, mutation(current))
                    row.category = updated.category.value
                    row.last_reviewed_at = updated.last_reviewed_at
        except SQLAlchemyError as e:
            logger.error(f"Failed to update card {card_id}: {e}")
            raise StoreError(f"Could not update card: {type(e).__name__}") from e

        return updated

    @staticmethod
    def _to_card(row: LeitnerCard) -> Card:
        return Card(
            id=row.card_id,
            question=row.question,
            answer=row.answer,
            tag=row.tag,
            category=Category(row.category),
            last_reviewed_at=row.last_reviewed_at,
        )


def build_card_store(settings: Settings) -> CardStore:
    """Create the card store selected by the CARD_STORE setting."""
    if settings.CARD_STORE == CardStoreBackend.SQL:
        logger.info("Using SQL card store")
        return SqlCardStore()

    logger.info("Using in-memory card store")
    return InMemoryCardStore()
