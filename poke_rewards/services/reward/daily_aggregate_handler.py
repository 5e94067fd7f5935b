"""
Daily aggregate bookkeeping.

Reads and updates the per-player, per-UTC-day reward totals and answers
daily-limit questions against them.
"""

from datetime import date

from loguru import logger

from poke_rewards.models.daily_aggregate import DailyAggregate
from poke_rewards.models.enums import GameKind
from poke_rewards.repositories.base import RewardStorage


class DailyAggregateHandler:
    """Handles daily aggregate reads, limit checks and updates."""

    def __init__(self, storage: RewardStorage) -> None:
        """
        Initialize handler.

        Args:
            storage: Reward storage
        """
        self.storage = storage

    async def get_or_empty(self, player_id: str, day: date) -> DailyAggregate:
        """
        Get a player's aggregate for a day, or an all-zero one.

        The empty aggregate is not persisted.
        """
        aggregate = await self.storage.get_daily_aggregate(player_id, day)
        return aggregate or DailyAggregate.empty(player_id, day)

    @staticmethod
    def would_exceed_limit(
        aggregate: DailyAggregate,
        game: GameKind,
        amount: int,
        daily_limit: int | None,
    ) -> bool:
        """
        Check whether awarding ``amount`` would push the game over its limit.

        Args:
            aggregate: Today's aggregate
            game: Game kind
            amount: Candidate reward amount
            daily_limit: Configured limit, None for uncapped games

        Returns:
            True if the reward must be rejected
        """
        if daily_limit is None:
            return False
        return aggregate.amount_for(game) + amount > daily_limit

    async def add(self, player_id: str, day: date, game: GameKind, amount: int) -> DailyAggregate:
        """
        Add a reward to the player's aggregate for a day.

        Args:
            player_id: Player ID
            day: UTC date
            game: Game kind
            amount: Reward amount

        Returns:
            Updated aggregate
        """
        aggregate = await self.get_or_empty(player_id, day)
        updated = aggregate.add(game, amount)
        await self.storage.save_daily_aggregate(updated)

        logger.debug(
            "Daily aggregate updated",
            extra={
                "player_id": player_id,
                "date": day.isoformat(),
                "game": game.value,
                "amount": amount,
                "total": updated.total,
            },
        )
        return updated
