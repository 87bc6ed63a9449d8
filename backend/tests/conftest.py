"""
Shared Test Fixtures and Configuration

This module provides pytest fixtures used across unit and integration tests.
"""

import os
import sys
from datetime import date
from pathlib import Path
from typing import Callable, Optional

import pytest

# Add the backend directory to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Pin the environment BEFORE any leitner module is imported: settings and the
# rate limiter are created at import time.
os.environ.update(
    {
        "CARD_STORE": "memory",
        "DATABASE_URL": "sqlite+aiosqlite://",
        "TIMEZONE": "UTC",
        "RATE_LIMIT_ENABLED": "false",
        "DEBUG": "true",
    }
)

from leitner.enums import Category  # noqa: E402
from leitner.services.learning import (  # noqa: E402
    Card,
    InMemoryCardStore,
    LeitnerScheduler,
    LeitnerService,
)


# ============================================================================
# Clock
# ============================================================================


@pytest.fixture
def today() -> date:
    """Fixed 'today' so due-date arithmetic never depends on the wall clock."""
    return date(2024, 3, 15)


# ============================================================================
# Domain Fixtures
# ============================================================================


@pytest.fixture
def scheduler() -> LeitnerScheduler:
    """Create a scheduler."""
    return LeitnerScheduler()


@pytest.fixture
def memory_store() -> InMemoryCardStore:
    """Create an empty in-memory card store."""
    return InMemoryCardStore()


@pytest.fixture
def service(memory_store: InMemoryCardStore) -> LeitnerService:
    """Create a Leitner service over the in-memory store."""
    return LeitnerService(memory_store)


@pytest.fixture
def make_card() -> Callable[..., Card]:
    """
    Build Card values directly (bypassing any store).

    Usage:
        card = make_card("a", Category.SECOND, last_reviewed_at=today)
    """

    def _make(
        card_id: str = "card-1",
        category: Category = Category.FIRST,
        last_reviewed_at: Optional[date] = None,
        question: str = "2+2?",
        answer: str = "4",
        tag: Optional[str] = None,
    ) -> Card:
        return Card(
            id=card_id,
            question=question,
            answer=answer,
            tag=tag,
            category=category,
            last_reviewed_at=last_reviewed_at,
        )

    return _make
