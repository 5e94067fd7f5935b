"""
Welcome bonus processing.

Each player receives the welcome bonus at most once. Welcome rewards do
not count toward the daily aggregate.
"""

from collections.abc import Callable
from datetime import datetime

from loguru import logger

from poke_rewards.models.enums import GameKind
from poke_rewards.models.events import RewardResponse
from poke_rewards.models.reward import RewardRecord
from poke_rewards.repositories.base import RewardStorage
from reward_calculator import RewardCalculator


class WelcomeBonusProcessor:
    """Issues the one-time welcome bonus."""

    def __init__(
        self,
        storage: RewardStorage,
        calculator: RewardCalculator,
        clock: Callable[[], datetime],
    ) -> None:
        self.storage = storage
        self.calculator = calculator
        self.clock = clock

    async def process(self, player_id: str) -> RewardResponse:
        """
        Issue the welcome bonus unless the player already has one.

        Args:
            player_id: Player ID

        Returns:
            RewardResponse
        """
        async with self.storage.unit_of_work(player_id):
            if await self.storage.has_welcome_reward(player_id):
                logger.info(
                    "Welcome bonus already claimed",
                    extra={"player_id": player_id},
                )
                return RewardResponse.rejected("Welcome bonus already claimed")

            reward = RewardRecord.create(
                player_id=player_id,
                game=GameKind.WELCOME,
                amount=self.calculator.get_welcome_reward(),
                event_data={"type": "welcome_bonus"},
                created_at=self.clock(),
            )
            await self.storage.create_reward(reward)

        logger.info(
            "Welcome bonus issued",
            extra={"reward_id": str(reward.id), "player_id": player_id, "amount": reward.amount},
        )
        return RewardResponse.accepted(reward, "Welcome bonus processed successfully")
