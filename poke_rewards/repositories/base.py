"""
Reward storage contract.

Every backend implements the same async capability set. The engine only
ever talks to this interface; a concrete backend is injected at
construction time.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import date
from uuid import UUID

from poke_rewards.models.daily_aggregate import DailyAggregate
from poke_rewards.models.login_streak import LoginStreakState
from poke_rewards.models.reward import RewardRecord


class RewardStorage(ABC):
    """
    Base storage for rewards, daily aggregates and login streaks.

    All operations are safe to call concurrently. Reads never mutate.

    Example:
        class RedisRewardStorage(RewardStorage):
            async def create_reward(self, reward: RewardRecord) -> None:
                ...
    """

    @abstractmethod
    def unit_of_work(self, player_id: str) -> AbstractAsyncContextManager[None]:
        """
        Serialize all work for one player.

        Every read-check-write sequence for a player runs inside this
        context. Transactional backends commit the writes made inside it
        together, or none of them.

        Args:
            player_id: Player ID
        """

    # Rewards

    @abstractmethod
    async def create_reward(self, reward: RewardRecord) -> None:
        """
        Persist a new reward.

        Args:
            reward: Reward to store
        """

    @abstractmethod
    async def get_reward(self, reward_id: UUID) -> RewardRecord | None:
        """
        Get reward by ID.

        Args:
            reward_id: Reward ID

        Returns:
            Reward or None if not found
        """

    @abstractmethod
    async def get_rewards(self, player_id: str) -> list[RewardRecord]:
        """
        Get all rewards for a player, oldest first.

        Args:
            player_id: Player ID

        Returns:
            List of rewards
        """

    @abstractmethod
    async def get_unclaimed_rewards(self, player_id: str) -> list[RewardRecord]:
        """
        Get unclaimed rewards for a player, oldest first.

        Args:
            player_id: Player ID

        Returns:
            List of unclaimed rewards
        """

    @abstractmethod
    async def mark_reward_claimed(self, reward_id: UUID) -> None:
        """
        Mark one reward as claimed.

        Args:
            reward_id: Reward ID

        Raises:
            RewardNotFoundError: If the reward does not exist
        """

    @abstractmethod
    async def mark_all_rewards_claimed(self, player_id: str) -> int:
        """
        Mark every unclaimed reward of a player as claimed.

        Args:
            player_id: Player ID

        Returns:
            Number of rewards that flipped to claimed
        """

    @abstractmethod
    async def has_welcome_reward(self, player_id: str, unclaimed_only: bool = False) -> bool:
        """
        Check whether a player has a welcome reward.

        Args:
            player_id: Player ID
            unclaimed_only: Only count welcome rewards not yet claimed

        Returns:
            True if a matching welcome reward exists
        """

    @abstractmethod
    async def set_settlement_reference(self, reward_id: UUID, reference: str) -> None:
        """
        Record the transfer reference for a settled reward.

        Args:
            reward_id: Reward ID
            reference: Settlement reference from the disburser

        Raises:
            RewardNotFoundError: If the reward does not exist
            SettlementAlreadyRecordedError: If a reference is already set
        """

    # Daily aggregates

    @abstractmethod
    async def get_daily_aggregate(self, player_id: str, day: date) -> DailyAggregate | None:
        """
        Get a player's aggregate for a UTC date.

        Args:
            player_id: Player ID
            day: UTC date

        Returns:
            Aggregate or None if the player earned nothing that day
        """

    @abstractmethod
    async def save_daily_aggregate(self, aggregate: DailyAggregate) -> None:
        """
        Insert or replace a daily aggregate.

        Args:
            aggregate: Aggregate to store
        """

    # Login streaks

    @abstractmethod
    async def get_login_streak(self, player_id: str) -> LoginStreakState | None:
        """
        Get a player's login streak.

        Args:
            player_id: Player ID

        Returns:
            Streak or None if the player never logged in
        """

    @abstractmethod
    async def save_login_streak(self, streak: LoginStreakState) -> None:
        """
        Insert or replace a login streak.

        Args:
            streak: Streak to store
        """

    async def close(self) -> None:
        """Release backend resources."""
        return None
