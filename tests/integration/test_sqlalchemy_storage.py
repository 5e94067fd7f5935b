"""
Integration tests for the SQLAlchemy reward storage.

Runs the full engine against an in-memory SQLite database (aiosqlite).
"""

import asyncio
from collections.abc import AsyncGenerator
from datetime import date
from typing import Any
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from poke_rewards.config.database import create_database_engine
from poke_rewards.models import GameKind, RewardRecord
from poke_rewards.models.tables import DailyAggregateRow, PlayerLockRow
from poke_rewards.repositories import SqlAlchemyRewardStorage
from poke_rewards.repositories.sqlalchemy_storage import (
    lock_player_query,
    register_player_query,
)
from poke_rewards.services import RewardEngine
from poke_rewards.utils.datetime_utils import utc_today
from poke_rewards.utils.exceptions import (
    RewardNotFoundError,
    SettlementAlreadyRecordedError,
    StorageError,
)
from reward_calculator import RewardTable, poke


PLAYER_ID = "player123"

FLYPOKE_EVENT: dict[str, Any] = {
    "player_id": PLAYER_ID,
    "game": "flypoke",
    "event_data": {"score": 2500, "is_new_high_score": True},
}


@pytest_asyncio.fixture
async def sql_storage() -> AsyncGenerator[SqlAlchemyRewardStorage, None]:
    """SQL storage over a fresh in-memory database."""
    engine = create_database_engine("sqlite+aiosqlite:///:memory:")
    storage = SqlAlchemyRewardStorage(engine)
    await storage.create_tables()
    yield storage
    await storage.close()


@pytest.fixture
def sql_engine(sql_storage: SqlAlchemyRewardStorage, clock) -> RewardEngine:
    """Reward engine over SQL storage."""
    return RewardEngine(RewardTable(), sql_storage, clock=clock)


class TestSqlRewards:
    """Tests for reward persistence."""

    @pytest.mark.asyncio
    async def test_reward_round_trip(self, sql_engine: RewardEngine, clock) -> None:
        """Test stored reward reads back with UTC timestamp and payload."""
        response = await sql_engine.process_event(FLYPOKE_EVENT)

        rewards = await sql_engine.get_rewards(PLAYER_ID)

        assert len(rewards) == 1
        stored = rewards[0]
        assert stored.id == response.reward.id
        assert stored.game is GameKind.FLYPOKE
        assert stored.amount == poke(120)
        assert stored.created_at == clock()
        assert stored.event_data["score"] == 2500
        assert stored.claimed is False

    @pytest.mark.asyncio
    async def test_rewards_ordered_by_creation(self, sql_engine: RewardEngine, clock) -> None:
        """Test rewards come back oldest first."""
        ids = []
        for level in range(3):
            response = await sql_engine.process_battle_event(PLAYER_ID, {"level": level})
            ids.append(response.reward.id)
            clock.advance(minutes=1)

        assert [r.id for r in await sql_engine.get_rewards(PLAYER_ID)] == ids

    @pytest.mark.asyncio
    async def test_duplicate_reward_is_storage_error(
        self, sql_storage: SqlAlchemyRewardStorage
    ) -> None:
        """Test database errors surface as StorageError."""
        reward = RewardRecord.create(PLAYER_ID, GameKind.DEX, poke(10), {})
        await sql_storage.create_reward(reward)

        with pytest.raises(StorageError):
            await sql_storage.create_reward(reward)

    @pytest.mark.asyncio
    async def test_unit_of_work_rolls_back(self, sql_storage: SqlAlchemyRewardStorage) -> None:
        """Test writes inside a failed unit of work are discarded."""
        with pytest.raises(RuntimeError):
            async with sql_storage.unit_of_work(PLAYER_ID):
                await sql_storage.create_reward(
                    RewardRecord.create(PLAYER_ID, GameKind.DEX, poke(10), {})
                )
                raise RuntimeError("boom")

        assert await sql_storage.get_rewards(PLAYER_ID) == []


class TestSqlDailyLimits:
    """Tests for daily limits over SQL storage."""

    @pytest.mark.asyncio
    async def test_limit_saturation(
        self, sql_engine: RewardEngine, sql_storage: SqlAlchemyRewardStorage, clock
    ) -> None:
        """Test fifth 120 POKE round is rejected and the total column agrees."""
        results = [await sql_engine.process_event(FLYPOKE_EVENT) for _ in range(5)]

        assert [r.success for r in results] == [True, True, True, True, False]
        assert results[-1].daily_limit_reached is True

        today = utc_today(clock())
        aggregate = await sql_engine.get_daily_aggregate(PLAYER_ID, today)
        assert aggregate.flypoke == poke(480)

        async with sql_storage.session_maker() as session:
            row = await session.get(DailyAggregateRow, (PLAYER_ID, today))
            assert row.total == poke(480)
            assert row.match == 0

    @pytest.mark.asyncio
    async def test_concurrent_events(self, sql_engine: RewardEngine, clock) -> None:
        """Test parallel events of one player are serialized."""
        responses = await asyncio.gather(
            *(sql_engine.process_event(FLYPOKE_EVENT) for _ in range(6))
        )

        assert sum(r.success for r in responses) == 4
        aggregate = await sql_engine.get_daily_aggregate(PLAYER_ID, utc_today(clock()))
        assert aggregate.flypoke == poke(480)

    @pytest.mark.asyncio
    async def test_aggregate_absent(self, sql_engine: RewardEngine) -> None:
        """Test no aggregate row for a day without rewards."""
        assert await sql_engine.get_daily_aggregate(PLAYER_ID, date(2025, 1, 1)) is None


class TestSqlStreaksAndWelcome:
    """Tests for login streaks and the welcome bonus over SQL storage."""

    @pytest.mark.asyncio
    async def test_login_streak_across_days(self, sql_engine: RewardEngine, clock) -> None:
        """Test streak grows daily and same-day login is rejected."""
        amounts = []
        for _ in range(3):
            amounts.append((await sql_engine.process_login_event(PLAYER_ID)).reward.amount)
            again = await sql_engine.process_login_event(PLAYER_ID)
            assert again.success is False
            clock.advance(days=1)

        assert amounts == [poke(20), poke(20), poke(30)]

    @pytest.mark.asyncio
    async def test_welcome_once(self, sql_engine: RewardEngine, sql_storage, clock) -> None:
        """Test welcome bonus is issued once even after claiming."""
        assert (await sql_engine.process_welcome_event(PLAYER_ID)).success is True
        await sql_engine.claim_rewards(PLAYER_ID)

        assert (await sql_engine.process_welcome_event(PLAYER_ID)).success is False
        assert await sql_storage.has_welcome_reward(PLAYER_ID, unclaimed_only=True) is False
        assert await sql_engine.get_daily_aggregate(PLAYER_ID, utc_today(clock())) is None


class TestSqlClaims:
    """Tests for claims and settlement over SQL storage."""

    @pytest.mark.asyncio
    async def test_claim_all_counts(self, sql_engine: RewardEngine) -> None:
        """Test claim-all returns the number of newly claimed rewards."""
        for level in range(3):
            await sql_engine.process_battle_event(PLAYER_ID, {"level": level})
        assert await sql_engine.claim_rewards(PLAYER_ID) == 3

        await sql_engine.process_dex_event(PLAYER_ID, {"pokemon_id": "1"})
        await sql_engine.process_dex_event(PLAYER_ID, {"pokemon_id": "2"})

        assert await sql_engine.claim_rewards(PLAYER_ID) == 2
        assert await sql_engine.claim_rewards(PLAYER_ID) == 0
        assert await sql_engine.get_unclaimed_rewards(PLAYER_ID) == []

    @pytest.mark.asyncio
    async def test_claim_single(self, sql_engine: RewardEngine, sql_storage) -> None:
        """Test claim by ID and missing ID."""
        reward = (await sql_engine.process_dex_event(PLAYER_ID, {"pokemon_id": "1"})).reward

        await sql_engine.claim_reward(reward.id)

        assert (await sql_storage.get_reward(reward.id)).claimed is True
        with pytest.raises(RewardNotFoundError):
            await sql_engine.claim_reward(uuid4())

    @pytest.mark.asyncio
    async def test_settlement_reference_once(self, sql_engine: RewardEngine, sql_storage) -> None:
        """Test settlement reference is write-once."""
        reward = (await sql_engine.process_welcome_event(PLAYER_ID)).reward

        await sql_storage.set_settlement_reference(reward.id, "sig-1")

        assert (await sql_storage.get_reward(reward.id)).settlement_reference == "sig-1"
        with pytest.raises(SettlementAlreadyRecordedError):
            await sql_storage.set_settlement_reference(reward.id, "sig-2")


class TestSqlPlayerLock:
    """Tests for the per-player lock row."""

    @pytest.mark.asyncio
    async def test_unit_of_work_creates_lock_row(self, sql_storage: SqlAlchemyRewardStorage) -> None:
        """Test a unit of work leaves exactly one lock row for the player."""
        for _ in range(3):
            async with sql_storage.unit_of_work(PLAYER_ID):
                pass

        async with sql_storage.session_maker() as session:
            result = await session.execute(select(PlayerLockRow.player_id))
            assert result.scalars().all() == [PLAYER_ID]

    @pytest.mark.asyncio
    async def test_lock_row_survives_failed_work_of_existing_player(
        self, sql_engine: RewardEngine, sql_storage: SqlAlchemyRewardStorage
    ) -> None:
        """Test a rolled-back unit of work does not break later ones."""
        await sql_engine.process_login_event(PLAYER_ID)

        with pytest.raises(RuntimeError):
            async with sql_storage.unit_of_work(PLAYER_ID):
                raise RuntimeError("boom")

        response = await sql_engine.process_event(FLYPOKE_EVENT)
        assert response.success is True
        assert len(sql_storage._player_locks) == 0

    def test_lock_query_selects_for_update(self) -> None:
        """Test the player lock is a row lock on PostgreSQL."""
        sql = str(lock_player_query(PLAYER_ID).compile(dialect=postgresql.dialect()))

        assert "FOR UPDATE" in sql
        assert "player_locks" in sql

    def test_register_query_ignores_conflicts(self) -> None:
        """Test the lock row insert tolerates a row created by another process."""
        statement = register_player_query("postgresql", PLAYER_ID)
        sql = str(statement.compile(dialect=postgresql.dialect()))

        assert "ON CONFLICT (player_id) DO NOTHING" in sql

    def test_register_query_absent_without_on_conflict(self) -> None:
        """Test dialects without ON CONFLICT fall back to get-then-add."""
        assert register_player_query("mssql", PLAYER_ID) is None
