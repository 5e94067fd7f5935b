"""
SQLAlchemy reward storage.

Async SQLAlchemy 2.0 backend over the ``rewards``, ``daily_aggregates`` and
``login_streaks`` tables.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar
from datetime import date
from uuid import UUID

from loguru import logger
from sqlalchemy import Executable, Select, and_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from poke_rewards.models.daily_aggregate import DailyAggregate
from poke_rewards.models.enums import GameKind
from poke_rewards.models.login_streak import LoginStreakState
from poke_rewards.models.reward import RewardRecord
from poke_rewards.models.tables import (
    Base,
    DailyAggregateRow,
    LoginStreakRow,
    PlayerLockRow,
    RewardRow,
)
from poke_rewards.repositories.base import RewardStorage
from poke_rewards.repositories.locks import PlayerLocks
from poke_rewards.utils.exceptions import (
    RewardNotFoundError,
    SettlementAlreadyRecordedError,
    StorageError,
)


_CONFLICT_IGNORING_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def register_player_query(dialect_name: str, player_id: str) -> Executable | None:
    """
    Insert of a player's ``player_locks`` row that leaves an existing row alone.

    Returns None for dialects without ``ON CONFLICT DO NOTHING``.
    """
    insert = _CONFLICT_IGNORING_INSERTS.get(dialect_name)
    if insert is None:
        return None
    return (
        insert(PlayerLockRow)
        .values(player_id=player_id)
        .on_conflict_do_nothing(index_elements=["player_id"])
    )


def lock_player_query(player_id: str) -> Select:
    """Row lock on a player's ``player_locks`` row."""
    return (
        select(PlayerLockRow.player_id)
        .where(PlayerLockRow.player_id == player_id)
        .with_for_update()
    )


class SqlAlchemyRewardStorage(RewardStorage):
    """
    Reward storage backed by a relational database.

    Outside a unit of work every call runs in its own short transaction.
    Inside ``unit_of_work`` all calls share one session bound through a
    ContextVar, so a reward and its aggregate update commit together.
    Aggregate and streak reads inside a unit of work lock their rows
    (``FOR UPDATE``) on backends that support it. Each unit of work first
    locks the player's ``player_locks`` row, which serializes one player's
    work across processes sharing the database.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        """
        Initialize storage.

        Args:
            engine: Async SQLAlchemy engine
        """
        self.engine = engine
        self.session_maker = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True,
        )
        self._current_session: ContextVar[AsyncSession | None] = ContextVar(
            f"reward_storage_session_{id(self)}", default=None
        )
        self._player_locks = PlayerLocks()

    async def create_tables(self) -> None:
        """Create reward tables if they do not exist."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create reward tables: {e}") from e

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        current = self._current_session.get()
        if current is not None:
            yield current
            return

        try:
            async with self.session_maker() as session:
                async with session.begin():
                    yield session
        except SQLAlchemyError as e:
            logger.error(f"Reward storage failure: {e}")
            raise StorageError(str(e)) from e

    async def _lock_player_row(self, session: AsyncSession, player_id: str) -> None:
        register = register_player_query(self.engine.dialect.name, player_id)
        if register is not None:
            await session.execute(register)
        elif await session.get(PlayerLockRow, player_id) is None:
            session.add(PlayerLockRow(player_id=player_id))
            await session.flush()
        await session.execute(lock_player_query(player_id))

    @asynccontextmanager
    async def unit_of_work(self, player_id: str) -> AsyncIterator[None]:
        """
        Serialize one player's work and commit it as one transaction.

        Tasks in this process queue on an asyncio lock. The transaction
        then locks the player's ``player_locks`` row, so another process
        sharing the database waits until this one commits. Two processes
        racing to create a new player's row on a backend without
        ``ON CONFLICT`` support get a retryable StorageError.
        """
        async with self._player_locks.hold(player_id):
            async with self._session() as session:
                await self._lock_player_row(session, player_id)
                token = self._current_session.set(session)
                try:
                    yield
                finally:
                    self._current_session.reset(token)

    # Row mapping

    @staticmethod
    def _to_reward(row: RewardRow) -> RewardRecord:
        return RewardRecord(
            id=UUID(row.id),
            player_id=row.player_id,
            game=GameKind(row.game),
            amount=row.amount,
            created_at=row.created_at,
            claimed=row.claimed,
            event_data=dict(row.event_data or {}),
            settlement_reference=row.settlement_reference,
        )

    @staticmethod
    def _to_aggregate(row: DailyAggregateRow) -> DailyAggregate:
        return DailyAggregate(
            player_id=row.player_id,
            date=row.date,
            flypoke=row.flypoke,
            battle=row.battle,
            match=row.match,
            dex=row.dex,
            login=row.login,
        )

    # Rewards

    async def create_reward(self, reward: RewardRecord) -> None:
        async with self._session() as session:
            session.add(
                RewardRow(
                    id=str(reward.id),
                    player_id=reward.player_id,
                    game=reward.game.value,
                    amount=reward.amount,
                    created_at=reward.created_at,
                    claimed=reward.claimed,
                    event_data=reward.event_data,
                    settlement_reference=reward.settlement_reference,
                )
            )
            await session.flush()

    async def get_reward(self, reward_id: UUID) -> RewardRecord | None:
        async with self._session() as session:
            row = await session.get(RewardRow, str(reward_id))
            return self._to_reward(row) if row else None

    async def get_rewards(self, player_id: str) -> list[RewardRecord]:
        query = (
            select(RewardRow)
            .where(RewardRow.player_id == player_id)
            .order_by(RewardRow.created_at.asc())
        )
        async with self._session() as session:
            result = await session.execute(query)
            return [self._to_reward(row) for row in result.scalars().all()]

    async def get_unclaimed_rewards(self, player_id: str) -> list[RewardRecord]:
        query = (
            select(RewardRow)
            .where(
                and_(
                    RewardRow.player_id == player_id,
                    RewardRow.claimed == False,  # noqa: E712
                )
            )
            .order_by(RewardRow.created_at.asc())
        )
        async with self._session() as session:
            result = await session.execute(query)
            return [self._to_reward(row) for row in result.scalars().all()]

    async def mark_reward_claimed(self, reward_id: UUID) -> None:
        async with self._session() as session:
            row = await session.get(RewardRow, str(reward_id), with_for_update=True)
            if row is None:
                raise RewardNotFoundError(reward_id)
            row.claimed = True

    async def mark_all_rewards_claimed(self, player_id: str) -> int:
        stmt = (
            update(RewardRow)
            .where(
                and_(
                    RewardRow.player_id == player_id,
                    RewardRow.claimed == False,  # noqa: E712
                )
            )
            .values(claimed=True)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return result.rowcount or 0

    async def has_welcome_reward(self, player_id: str, unclaimed_only: bool = False) -> bool:
        conditions = [
            RewardRow.player_id == player_id,
            RewardRow.game == GameKind.WELCOME.value,
        ]
        if unclaimed_only:
            conditions.append(RewardRow.claimed == False)  # noqa: E712
        query = select(RewardRow.id).where(and_(*conditions)).limit(1)
        async with self._session() as session:
            result = await session.execute(query)
            return result.scalar_one_or_none() is not None

    async def set_settlement_reference(self, reward_id: UUID, reference: str) -> None:
        async with self._session() as session:
            row = await session.get(RewardRow, str(reward_id), with_for_update=True)
            if row is None:
                raise RewardNotFoundError(reward_id)
            if row.settlement_reference is not None:
                raise SettlementAlreadyRecordedError(
                    f"Reward {reward_id} already settled as {row.settlement_reference}"
                )
            row.settlement_reference = reference

    # Daily aggregates

    async def get_daily_aggregate(self, player_id: str, day: date) -> DailyAggregate | None:
        query = select(DailyAggregateRow).where(
            and_(
                DailyAggregateRow.player_id == player_id,
                DailyAggregateRow.date == day,
            )
        )
        if self._current_session.get() is not None:
            query = query.with_for_update()

        async with self._session() as session:
            result = await session.execute(query)
            row = result.scalar_one_or_none()
            return self._to_aggregate(row) if row else None

    async def save_daily_aggregate(self, aggregate: DailyAggregate) -> None:
        async with self._session() as session:
            await session.merge(
                DailyAggregateRow(
                    player_id=aggregate.player_id,
                    date=aggregate.date,
                    flypoke=aggregate.flypoke,
                    battle=aggregate.battle,
                    match=aggregate.match,
                    dex=aggregate.dex,
                    login=aggregate.login,
                    total=aggregate.total,
                )
            )
            await session.flush()

    # Login streaks

    async def get_login_streak(self, player_id: str) -> LoginStreakState | None:
        locking = self._current_session.get() is not None
        async with self._session() as session:
            row = await session.get(LoginStreakRow, player_id, with_for_update=locking)
            if row is None:
                return None
            return LoginStreakState(
                player_id=row.player_id,
                current_streak=row.current_streak,
                last_login_date=row.last_login_date,
            )

    async def save_login_streak(self, streak: LoginStreakState) -> None:
        async with self._session() as session:
            await session.merge(
                LoginStreakRow(
                    player_id=streak.player_id,
                    current_streak=streak.current_streak,
                    last_login_date=streak.last_login_date,
                )
            )
            await session.flush()
