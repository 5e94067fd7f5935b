"""
In-memory reward storage.

Reference backend used by tests and single-process deployments.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID

from loguru import logger

from poke_rewards.models.daily_aggregate import DailyAggregate
from poke_rewards.models.enums import GameKind
from poke_rewards.models.login_streak import LoginStreakState
from poke_rewards.models.reward import RewardRecord
from poke_rewards.repositories.base import RewardStorage
from poke_rewards.repositories.locks import PlayerLocks
from poke_rewards.utils.exceptions import (
    RewardNotFoundError,
    SettlementAlreadyRecordedError,
)


class MemoryRewardStorage(RewardStorage):
    """
    Reward storage backed by dicts.

    Each entity kind has its own map and its own write lock, so reward
    writes never wait on aggregate or streak writes. Reads copy out of the
    map without taking a lock. Models are copied on the way in and out so
    callers cannot mutate stored state.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._rewards: dict[UUID, RewardRecord] = {}
        self._daily_aggregates: dict[tuple[str, date], DailyAggregate] = {}
        self._login_streaks: dict[str, LoginStreakState] = {}

        self._rewards_lock = asyncio.Lock()
        self._aggregates_lock = asyncio.Lock()
        self._streaks_lock = asyncio.Lock()

        self._player_locks = PlayerLocks()

    @asynccontextmanager
    async def unit_of_work(self, player_id: str) -> AsyncIterator[None]:
        async with self._player_locks.hold(player_id):
            yield

    # Rewards

    async def create_reward(self, reward: RewardRecord) -> None:
        async with self._rewards_lock:
            self._rewards[reward.id] = reward.model_copy(deep=True)
        logger.debug(
            "Reward stored",
            extra={"reward_id": str(reward.id), "player_id": reward.player_id},
        )

    async def get_reward(self, reward_id: UUID) -> RewardRecord | None:
        reward = self._rewards.get(reward_id)
        return reward.model_copy(deep=True) if reward else None

    async def get_rewards(self, player_id: str) -> list[RewardRecord]:
        return [
            reward.model_copy(deep=True)
            for reward in list(self._rewards.values())
            if reward.player_id == player_id
        ]

    async def get_unclaimed_rewards(self, player_id: str) -> list[RewardRecord]:
        return [
            reward.model_copy(deep=True)
            for reward in list(self._rewards.values())
            if reward.player_id == player_id and not reward.claimed
        ]

    async def mark_reward_claimed(self, reward_id: UUID) -> None:
        async with self._rewards_lock:
            reward = self._rewards.get(reward_id)
            if reward is None:
                raise RewardNotFoundError(reward_id)
            reward.claimed = True

    async def mark_all_rewards_claimed(self, player_id: str) -> int:
        claimed = 0
        async with self._rewards_lock:
            for reward in self._rewards.values():
                if reward.player_id == player_id and not reward.claimed:
                    reward.claimed = True
                    claimed += 1
        return claimed

    async def has_welcome_reward(self, player_id: str, unclaimed_only: bool = False) -> bool:
        return any(
            reward.player_id == player_id
            and reward.game == GameKind.WELCOME
            and not (unclaimed_only and reward.claimed)
            for reward in list(self._rewards.values())
        )

    async def set_settlement_reference(self, reward_id: UUID, reference: str) -> None:
        async with self._rewards_lock:
            reward = self._rewards.get(reward_id)
            if reward is None:
                raise RewardNotFoundError(reward_id)
            if reward.settlement_reference is not None:
                raise SettlementAlreadyRecordedError(
                    f"Reward {reward_id} already settled as {reward.settlement_reference}"
                )
            reward.settlement_reference = reference

    # Daily aggregates

    async def get_daily_aggregate(self, player_id: str, day: date) -> DailyAggregate | None:
        return self._daily_aggregates.get((player_id, day))

    async def save_daily_aggregate(self, aggregate: DailyAggregate) -> None:
        async with self._aggregates_lock:
            self._daily_aggregates[(aggregate.player_id, aggregate.date)] = aggregate

    # Login streaks

    async def get_login_streak(self, player_id: str) -> LoginStreakState | None:
        return self._login_streaks.get(player_id)

    async def save_login_streak(self, streak: LoginStreakState) -> None:
        async with self._streaks_lock:
            self._login_streaks[streak.player_id] = streak
