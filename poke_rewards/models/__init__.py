"""
Domain models.

Exports reward domain models for easy imports. SQLAlchemy tables live in
``poke_rewards.models.tables`` and are only used by the SQL storage.
"""

from poke_rewards.models.daily_aggregate import DailyAggregate
from poke_rewards.models.enums import AGGREGATED_GAMES, GameKind
from poke_rewards.models.events import (
    EVENT_DATA_MODELS,
    BattleEventData,
    DexEventData,
    EventData,
    FlyPokeEventData,
    GameEvent,
    LoginEventData,
    MatchEventData,
    RewardResponse,
    WelcomeEventData,
)
from poke_rewards.models.login_streak import LoginStreakState
from poke_rewards.models.reward import RewardRecord

__all__ = [
    "GameKind",
    "AGGREGATED_GAMES",
    "RewardRecord",
    "DailyAggregate",
    "LoginStreakState",
    "GameEvent",
    "RewardResponse",
    "EventData",
    "EVENT_DATA_MODELS",
    "FlyPokeEventData",
    "BattleEventData",
    "MatchEventData",
    "DexEventData",
    "LoginEventData",
    "WelcomeEventData",
]
