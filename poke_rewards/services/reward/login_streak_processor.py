"""
Login streak processing.

State machine over a player's LoginStreakState:

- no streak yet          -> streak 1
- last login today       -> rejected, nothing changes
- last login yesterday   -> streak + 1
- last login before that -> streak reset to 1
"""

from collections.abc import Callable
from datetime import datetime

from loguru import logger

from poke_rewards.models.enums import GameKind
from poke_rewards.models.events import RewardResponse
from poke_rewards.models.login_streak import LoginStreakState
from poke_rewards.models.reward import RewardRecord
from poke_rewards.repositories.base import RewardStorage
from poke_rewards.services.reward.daily_aggregate_handler import DailyAggregateHandler
from poke_rewards.utils.datetime_utils import utc_today
from reward_calculator import RewardCalculator


class LoginStreakProcessor:
    """Processes daily login rewards."""

    def __init__(
        self,
        storage: RewardStorage,
        calculator: RewardCalculator,
        aggregates: DailyAggregateHandler,
        clock: Callable[[], datetime],
    ) -> None:
        self.storage = storage
        self.calculator = calculator
        self.aggregates = aggregates
        self.clock = clock

    async def process(self, player_id: str) -> RewardResponse:
        """
        Process a login for a player.

        Args:
            player_id: Player ID

        Returns:
            RewardResponse; unsuccessful if the player already logged in today
        """
        async with self.storage.unit_of_work(player_id):
            now = self.clock()
            today = utc_today(now)

            current = await self.storage.get_login_streak(player_id)
            if current is None:
                streak = LoginStreakState.first_login(player_id, today)
            elif current.logged_in_on(today):
                logger.info(
                    "Login already processed today",
                    extra={"player_id": player_id, "streak": current.current_streak},
                )
                return RewardResponse.rejected("Already logged in today")
            else:
                streak = current.advance(today)

            await self.storage.save_login_streak(streak)

            amount = self.calculator.calculate_login_reward(streak.current_streak)
            reward = RewardRecord.create(
                player_id=player_id,
                game=GameKind.LOGIN,
                amount=amount,
                event_data={"streak": streak.current_streak},
                created_at=now,
            )
            await self.storage.create_reward(reward)
            await self.aggregates.add(player_id, today, GameKind.LOGIN, amount)

        logger.info(
            "Login reward processed",
            extra={
                "reward_id": str(reward.id),
                "player_id": player_id,
                "streak": streak.current_streak,
                "amount": amount,
            },
        )
        return RewardResponse.accepted(reward, "Login reward processed successfully")
