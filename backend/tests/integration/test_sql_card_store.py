"""
Integration tests for the SQL card store.

Runs against a real SQLite database (aiosqlite) created per test.
"""

import asyncio
from dataclasses import replace
from datetime import date, timedelta

import pytest
from sqlalchemy import select

from leitner.db.base import Base, build_session_maker
from leitner.db.models_learning import LeitnerCard
from leitner.enums import Category
from leitner.middleware.error_handling import NotFoundError, StoreError, ValidationError
from leitner.models.cards import CardCreate
from leitner.services.learning import LeitnerService, SqlCardStore

pytestmark = pytest.mark.integration


class TestSqlCardStore:
    """CRUD behaviour of SqlCardStore."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, sql_store):
        card = await sql_store.create("2+2?", "4", tag="math")

        loaded = await sql_store.get(card.id)

        assert loaded == card
        assert loaded.category is Category.FIRST
        assert loaded.last_reviewed_at is None

    @pytest.mark.asyncio
    async def test_row_written(self, sql_store, sql_engine):
        card = await sql_store.create("2+2?", "4")

        async with build_session_maker(sql_engine)() as session:
            row = (
                await session.execute(select(LeitnerCard).where(LeitnerCard.card_id == card.id))
            ).scalar_one()

        assert row.category == "FIRST"
        assert row.created_at is not None

    @pytest.mark.asyncio
    async def test_blank_question_not_written(self, sql_store):
        with pytest.raises(ValidationError):
            await sql_store.create(" ", "4")

        assert await sql_store.list() == []

    @pytest.mark.asyncio
    async def test_list_in_insertion_order(self, sql_store):
        created = [await sql_store.create(f"q{i}", "a") for i in range(4)]

        assert await sql_store.list() == created

    @pytest.mark.asyncio
    async def test_list_filtered_by_tags(self, sql_store):
        math = await sql_store.create("2+2?", "4", tag="math")
        await sql_store.create("Capital?", "Rome", tag="geo")
        history = await sql_store.create("1066?", "Hastings", tag="history")
        await sql_store.create("Untagged?", "yes")

        assert await sql_store.list(["math", "history"]) == [math, history]
        assert await sql_store.list(["Math"]) == []

    @pytest.mark.asyncio
    async def test_get_unknown(self, sql_store):
        with pytest.raises(NotFoundError):
            await sql_store.get("missing")

    @pytest.mark.asyncio
    async def test_update_persists_scheduling(self, sql_store):
        card = await sql_store.create("q", "a")
        reviewed = date(2024, 3, 15)

        await sql_store.update(
            card.id,
            lambda c: replace(c, category=Category.FIFTH, last_reviewed_at=reviewed),
        )

        loaded = await sql_store.get(card.id)
        assert loaded.category is Category.FIFTH
        assert loaded.last_reviewed_at == reviewed

    @pytest.mark.asyncio
    async def test_update_unknown_leaves_table_untouched(self, sql_store):
        card = await sql_store.create("q", "a")

        with pytest.raises(NotFoundError):
            await sql_store.update("missing", lambda c: replace(c, category=Category.DONE))

        assert await sql_store.list() == [card]

    @pytest.mark.asyncio
    async def test_failing_mutation_rolls_back(self, sql_store):
        card = await sql_store.create("q", "a")

        def boom(current):
            raise RuntimeError("mutation failed")

        with pytest.raises(RuntimeError):
            await sql_store.update(card.id, boom)

        assert await sql_store.get(card.id) == card

    @pytest.mark.asyncio
    async def test_concurrent_answers_all_applied(self, sql_store, today):
        service = LeitnerService(sql_store)
        card = await service.create_card(CardCreate(question="q", answer="a"))

        await asyncio.gather(
            *(service.record_answer(card.id, is_valid=True, today=today) for _ in range(5))
        )

        assert (await sql_store.get(card.id)).category is Category.SIXTH


class TestSqlStoreErrors:
    """Database failures surface as StoreError."""

    @pytest.mark.asyncio
    async def test_missing_table(self, sql_store, sql_engine):
        async with sql_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        with pytest.raises(StoreError) as exc_info:
            await sql_store.list()

        assert exc_info.value.status_code == 503
        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_update_on_missing_table(self, sql_store, sql_engine):
        card = await sql_store.create("q", "a")
        async with sql_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        with pytest.raises(StoreError):
            await sql_store.update(card.id, lambda c: c)

    @pytest.mark.asyncio
    async def test_create_on_missing_table(self, sql_engine):
        async with sql_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        store = SqlCardStore(build_session_maker(sql_engine))

        with pytest.raises(StoreError):
            await store.create("q", "a")


class TestQuizOverSql:
    """The Leitner quiz works the same over the SQL store."""

    @pytest.mark.asyncio
    async def test_first_day_pass(self, sql_store, today):
        service = LeitnerService(sql_store)
        card = await service.create_card(CardCreate(question="2+2?", answer="4"))

        await service.record_answer(card.id, is_valid=True, today=today)

        assert await service.due_cards(today + timedelta(days=1)) == []
        assert [c.id for c in await service.due_cards(today + timedelta(days=2))] == [card.id]
