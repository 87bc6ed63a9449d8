"""
Integration Test Fixtures

Provides fixtures for tests that exercise real SQLite databases and the
full FastAPI application.

Every test gets its own database file under pytest's tmp_path, so nothing
outside the test run is touched. The api_client fixture overrides
get_card_store and get_today, so the app never opens the database named by
DATABASE_URL.

Note: leitner.main is imported inside fixtures because it reads settings
that the parent conftest.py pins first.
"""

from datetime import date
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from leitner.db.base import build_engine, build_session_maker, init_db
from leitner.services.learning import CardStore, InMemoryCardStore, SqlCardStore

pytestmark = pytest.mark.integration


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def sql_engine(tmp_path):
    """
    Create an engine on a fresh SQLite file with the tables created.

    Creates a fresh engine per test to avoid event loop issues.
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'leitner-test.db'}")
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def sql_store(sql_engine) -> SqlCardStore:
    """SQL card store bound to the per-test database."""
    return SqlCardStore(build_session_maker(sql_engine))


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest_asyncio.fixture(scope="function", params=["memory", "sql"])
async def api_store(request, tmp_path) -> AsyncGenerator[CardStore, None]:
    """Run API tests once per store backend."""
    if request.param == "memory":
        yield InMemoryCardStore()
        return

    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'leitner-api.db'}")
    await init_db(engine)

    yield SqlCardStore(build_session_maker(engine))

    await engine.dispose()


@pytest.fixture
def clock(today):
    """
    Mutable clock used as the app's notion of today.

    Tests move time forward with `clock["today"] = ...`.
    """
    return {"today": today}


@pytest_asyncio.fixture(scope="function")
async def api_client(api_store, clock) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    Create an async HTTP client for the app.

    Overrides the card store and the clock. ASGITransport does not run the
    app lifespan, so the store configured there is never created.

    Note: As of httpx 0.28+, ASGITransport must be used instead of passing
    `app` directly to AsyncClient.
    """
    # Import here to defer until after environment is configured
    from leitner.dependencies import get_card_store, get_today
    from leitner.main import app

    def _today() -> date:
        return clock["today"]

    app.dependency_overrides[get_card_store] = lambda: api_store
    app.dependency_overrides[get_today] = _today

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Clean up dependency overrides after test
    app.dependency_overrides.pop(get_card_store, None)
    app.dependency_overrides.pop(get_today, None)
