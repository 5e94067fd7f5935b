"""
Reward engine.

Single entry point for game events: decodes the event, computes the
reward, applies daily limits and streak rules, and records the outcome.
"""

from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any
from uuid import UUID

from loguru import logger

from poke_rewards.models.daily_aggregate import DailyAggregate
from poke_rewards.models.enums import GameKind
from poke_rewards.models.events import (
    BattleEventData,
    DexEventData,
    EventData,
    FlyPokeEventData,
    GameEvent,
    MatchEventData,
    RewardResponse,
)
from poke_rewards.models.reward import RewardRecord
from poke_rewards.repositories.base import RewardStorage
from poke_rewards.services.reward.daily_aggregate_handler import DailyAggregateHandler
from poke_rewards.services.reward.game_reward_processor import GameRewardProcessor
from poke_rewards.services.reward.login_streak_processor import LoginStreakProcessor
from poke_rewards.services.reward.player_rewards import PlayerRewardManager
from poke_rewards.services.reward.welcome_bonus_processor import WelcomeBonusProcessor
from poke_rewards.utils.datetime_utils import utc_now
from poke_rewards.utils.exceptions import UnknownGameKindError
from poke_rewards.validators.events import (
    decode_event_data,
    decode_game_event,
    decode_player_id,
)
from reward_calculator import RewardCalculator, RewardTable, format_token_amount


class RewardEngine:
    """
    Main reward engine for processing game events.

    The engine keeps no per-player state of its own; everything lives in
    the injected storage, so one engine can serve concurrent events.

    Example:
        >>> engine = RewardEngine(RewardTable(), MemoryRewardStorage())
        >>> response = await engine.process_event({
        ...     "player_id": "player123",
        ...     "game": "flypoke",
        ...     "event_data": {"score": 1500, "is_new_high_score": False},
        ... })
        >>> response.reward.amount
        50000000000
    """

    def __init__(
        self,
        reward_table: RewardTable,
        storage: RewardStorage,
        clock: Callable[[], datetime] = utc_now,
        token_symbol: str = "POKE",
    ) -> None:
        """
        Initialize reward engine.

        Args:
            reward_table: Reward configuration, fixed for the engine's lifetime
            storage: Reward storage backend
            clock: Source of the current UTC time
            token_symbol: Symbol used when formatting amounts for display
        """
        self.reward_table = reward_table
        self.storage = storage
        self.token_symbol = token_symbol
        self.calculator = RewardCalculator(reward_table)

        self.aggregates = DailyAggregateHandler(storage)
        self.game_processor = GameRewardProcessor(storage, self.aggregates, clock)
        self.login_processor = LoginStreakProcessor(
            storage, self.calculator, self.aggregates, clock
        )
        self.welcome_processor = WelcomeBonusProcessor(storage, self.calculator, clock)
        self.player_rewards = PlayerRewardManager(storage)

    def get_daily_limit(self, game: GameKind) -> int | None:
        """
        Get the configured daily limit for a game.

        Returns:
            Limit in smallest units, or None if the game is uncapped
        """
        limits = {
            GameKind.FLYPOKE: self.reward_table.flypoke.daily_limit,
            GameKind.BATTLE: self.reward_table.battle.daily_limit,
            GameKind.MATCH: self.reward_table.match.daily_limit,
            GameKind.DEX: self.reward_table.dex.daily_limit,
        }
        return limits.get(game)

    def format_amount(self, amount: int) -> str:
        """Format a reward amount for display, e.g. ``"120 POKE"``."""
        return format_token_amount(
            amount,
            symbol=self.token_symbol,
            decimals=self.reward_table.token_decimals,
        )

    # Event processing

    async def process_event(self, event: GameEvent | Mapping[str, Any]) -> RewardResponse:
        """
        Process a kind-tagged game event.

        Args:
            event: GameEvent or raw mapping with player_id, game, event_data

        Returns:
            RewardResponse (unsuccessful for policy rejections)

        Raises:
            UnknownGameKindError: If the game kind is not recognized
            EventValidationError: If the event or its payload is malformed
            StorageError: If the storage backend fails
        """
        decoded, payload = decode_game_event(event)
        return await self._dispatch(decoded.player_id, decoded.game, payload)

    async def _dispatch(self, player_id: str, game: GameKind, payload: EventData) -> RewardResponse:
        if game == GameKind.FLYPOKE:
            return await self.process_flypoke_event(player_id, payload)
        if game == GameKind.BATTLE:
            return await self.process_battle_event(player_id, payload)
        if game == GameKind.MATCH:
            return await self.process_match_event(player_id, payload)
        if game == GameKind.DEX:
            return await self.process_dex_event(player_id, payload)
        if game == GameKind.LOGIN:
            return await self.process_login_event(player_id)
        if game == GameKind.WELCOME:
            return await self.process_welcome_event(player_id)
        raise UnknownGameKindError(game)

    async def process_flypoke_event(
        self,
        player_id: str,
        event_data: FlyPokeEventData | Mapping[str, Any],
    ) -> RewardResponse:
        """
        Process FlyPoke game event.

        Args:
            player_id: Player ID
            event_data: FlyPoke payload (score, is_new_high_score)

        Returns:
            RewardResponse
        """
        player_id = decode_player_id(player_id)
        data = decode_event_data(FlyPokeEventData, event_data)

        amount = self.calculator.calculate_flypoke_reward(data.score, data.is_new_high_score)
        return await self.game_processor.process(
            player_id,
            GameKind.FLYPOKE,
            amount,
            self.get_daily_limit(GameKind.FLYPOKE),
            data.model_dump(mode="json"),
        )

    async def process_battle_event(
        self,
        player_id: str,
        event_data: BattleEventData | Mapping[str, Any],
    ) -> RewardResponse:
        """
        Process Battle game event.

        Args:
            player_id: Player ID
            event_data: Battle payload (level, streak)

        Returns:
            RewardResponse
        """
        player_id = decode_player_id(player_id)
        data = decode_event_data(BattleEventData, event_data)

        amount = self.calculator.calculate_battle_reward(data.level, data.streak)
        return await self.game_processor.process(
            player_id,
            GameKind.BATTLE,
            amount,
            self.get_daily_limit(GameKind.BATTLE),
            data.model_dump(mode="json"),
        )

    async def process_match_event(
        self,
        player_id: str,
        event_data: MatchEventData | Mapping[str, Any],
    ) -> RewardResponse:
        """Process PokeMatch game event."""
        player_id = decode_player_id(player_id)
        data = decode_event_data(MatchEventData, event_data)

        amount = self.calculator.calculate_match_reward(data.perfect)
        return await self.game_processor.process(
            player_id,
            GameKind.MATCH,
            amount,
            self.get_daily_limit(GameKind.MATCH),
            data.model_dump(mode="json"),
        )

    async def process_dex_event(
        self,
        player_id: str,
        event_data: DexEventData | Mapping[str, Any],
    ) -> RewardResponse:
        """Process Pokedex game event."""
        player_id = decode_player_id(player_id)
        data = decode_event_data(DexEventData, event_data)

        amount = self.calculator.calculate_dex_reward(data.is_rare)
        return await self.game_processor.process(
            player_id,
            GameKind.DEX,
            amount,
            self.get_daily_limit(GameKind.DEX),
            data.model_dump(mode="json"),
        )

    async def process_login_event(self, player_id: str) -> RewardResponse:
        """
        Process daily login event.

        Returns:
            RewardResponse; unsuccessful if already logged in today
        """
        return await self.login_processor.process(decode_player_id(player_id))

    async def process_welcome_event(self, player_id: str) -> RewardResponse:
        """
        Process welcome bonus request.

        Returns:
            RewardResponse; unsuccessful if the bonus was already issued
        """
        return await self.welcome_processor.process(decode_player_id(player_id))

    # Queries

    async def get_rewards(self, player_id: str) -> list[RewardRecord]:
        """Get all rewards for a player."""
        return await self.player_rewards.get_rewards(decode_player_id(player_id))

    async def get_unclaimed_rewards(self, player_id: str) -> list[RewardRecord]:
        """Get unclaimed rewards for a player."""
        return await self.player_rewards.get_unclaimed_rewards(decode_player_id(player_id))

    async def get_daily_aggregate(self, player_id: str, day: date) -> DailyAggregate | None:
        """
        Get a player's daily aggregate.

        Returns:
            Aggregate, or None when nothing was earned that day
        """
        return await self.player_rewards.get_daily_aggregate(decode_player_id(player_id), day)

    async def claim_rewards(self, player_id: str) -> int:
        """
        Claim all unclaimed rewards for a player.

        Returns:
            Number of rewards claimed
        """
        return await self.player_rewards.claim_all(decode_player_id(player_id))

    async def claim_reward(self, reward_id: UUID) -> None:
        """
        Claim one reward by ID.

        Raises:
            RewardNotFoundError: If the reward does not exist
        """
        await self.player_rewards.claim(reward_id)

    async def close(self) -> None:
        """Release storage resources."""
        await self.storage.close()
        logger.debug("Reward engine closed")
