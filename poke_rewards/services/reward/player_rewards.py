"""
Player reward queries and claims.
"""

from datetime import date
from uuid import UUID

from loguru import logger

from poke_rewards.models.daily_aggregate import DailyAggregate
from poke_rewards.models.reward import RewardRecord
from poke_rewards.repositories.base import RewardStorage


class PlayerRewardManager:
    """Read-only reward queries plus claim operations for players."""

    def __init__(self, storage: RewardStorage) -> None:
        self.storage = storage

    async def get_rewards(self, player_id: str) -> list[RewardRecord]:
        """Get all rewards of a player, oldest first."""
        return await self.storage.get_rewards(player_id)

    async def get_unclaimed_rewards(self, player_id: str) -> list[RewardRecord]:
        """Get rewards the player has not claimed yet."""
        return await self.storage.get_unclaimed_rewards(player_id)

    async def get_daily_aggregate(self, player_id: str, day: date) -> DailyAggregate | None:
        """
        Get a player's aggregate for a UTC date.

        Returns:
            Aggregate, or None when the player earned nothing that day
        """
        return await self.storage.get_daily_aggregate(player_id, day)

    async def claim_all(self, player_id: str) -> int:
        """
        Claim every unclaimed reward of a player.

        Calling it again with nothing left to claim is a no-op.

        Returns:
            Number of rewards claimed by this call
        """
        async with self.storage.unit_of_work(player_id):
            claimed = await self.storage.mark_all_rewards_claimed(player_id)

        if claimed:
            logger.info(
                "Rewards claimed",
                extra={"player_id": player_id, "claimed": claimed},
            )
        return claimed

    async def claim(self, reward_id: UUID) -> None:
        """
        Claim a single reward.

        Raises:
            RewardNotFoundError: If the reward does not exist
        """
        await self.storage.mark_reward_claimed(reward_id)
        logger.info("Reward claimed", extra={"reward_id": str(reward_id)})
