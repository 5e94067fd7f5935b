"""
Game reward processing.

Runs the capped-game protocol shared by FlyPoke, Battle, PokeMatch and
Pokedex: compute, check the daily limit, record the reward, update the
daily aggregate.
"""

from collections.abc import Callable
from datetime import datetime

from loguru import logger

from poke_rewards.models.enums import GameKind
from poke_rewards.models.events import RewardResponse
from poke_rewards.models.reward import RewardRecord
from poke_rewards.repositories.base import RewardStorage
from poke_rewards.services.reward.daily_aggregate_handler import DailyAggregateHandler
from poke_rewards.utils.datetime_utils import utc_today


GAME_DISPLAY_NAMES = {
    GameKind.FLYPOKE: "FlyPoke",
    GameKind.BATTLE: "Battle",
    GameKind.MATCH: "PokeMatch",
    GameKind.DEX: "Pokedex",
    GameKind.LOGIN: "Login",
    GameKind.WELCOME: "Welcome",
}


class GameRewardProcessor:
    """Processes rewards for games subject to daily limits."""

    def __init__(
        self,
        storage: RewardStorage,
        aggregates: DailyAggregateHandler,
        clock: Callable[[], datetime],
    ) -> None:
        """
        Initialize processor.

        Args:
            storage: Reward storage
            aggregates: Daily aggregate handler
            clock: Source of the current UTC time
        """
        self.storage = storage
        self.aggregates = aggregates
        self.clock = clock

    async def process(
        self,
        player_id: str,
        game: GameKind,
        amount: int,
        daily_limit: int | None,
        event_data: dict,
    ) -> RewardResponse:
        """
        Record a reward unless it would exceed the game's daily limit.

        The limit check and both writes run inside the player's unit of
        work, so two concurrent events cannot both pass the check on the
        same stale aggregate. A rejected event writes nothing.

        Args:
            player_id: Player ID
            game: Game kind
            amount: Calculated reward amount
            daily_limit: Daily limit for the game, None if uncapped
            event_data: Decoded payload to keep on the record

        Returns:
            RewardResponse
        """
        name = GAME_DISPLAY_NAMES[game]

        async with self.storage.unit_of_work(player_id):
            now = self.clock()
            today = utc_today(now)

            aggregate = await self.aggregates.get_or_empty(player_id, today)
            if self.aggregates.would_exceed_limit(aggregate, game, amount, daily_limit):
                logger.info(
                    "Daily limit reached",
                    extra={
                        "player_id": player_id,
                        "game": game.value,
                        "amount": amount,
                        "current": aggregate.amount_for(game),
                        "daily_limit": daily_limit,
                    },
                )
                return RewardResponse.rejected(
                    f"Daily limit reached for {name}",
                    daily_limit_reached=True,
                )

            reward = RewardRecord.create(
                player_id=player_id,
                game=game,
                amount=amount,
                event_data=event_data,
                created_at=now,
            )
            await self.storage.create_reward(reward)
            await self.aggregates.add(player_id, today, game, amount)

        logger.info(
            "Reward processed",
            extra={
                "reward_id": str(reward.id),
                "player_id": player_id,
                "game": game.value,
                "amount": amount,
            },
        )
        return RewardResponse.accepted(reward, "Reward processed successfully")
