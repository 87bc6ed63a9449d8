"""
Learning System Services

Services for the Leitner flashcard system.

Modules:
- card_store: Card persistence (in-memory and SQL backends)
- leitner: Leitner scheduler (due predicate, ordering, category transitions)
- leitner_service: Use cases combining the scheduler with a card store

Usage:
    from leitner.services.learning import (
        LeitnerService,
        LeitnerScheduler,
        InMemoryCardStore,
        SqlCardStore,
    )
"""

from leitner.services.learning.card_store import (
    Card,
    CardStore,
    InMemoryCardStore,
    KeyedLock,
    SqlCardStore,
    build_card_store,
)
from leitner.services.learning.leitner import (
    LeitnerScheduler,
    create_scheduler,
    due_order_key,
    next_category,
)
from leitner.services.learning.leitner_service import LeitnerService

__all__ = [
    # Card store
    "Card",
    "CardStore",
    "InMemoryCardStore",
    "SqlCardStore",
    "KeyedLock",
    "build_card_store",
    # Scheduler
    "LeitnerScheduler",
    "create_scheduler",
    "due_order_key",
    "next_category",
    # Services
    "LeitnerService",
]
