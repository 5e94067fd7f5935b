"""
Game event and response models.

Event payload schemas are game-specific; unknown extra fields are ignored
so clients can send richer telemetry than the engine needs.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from poke_rewards.models.enums import GameKind
from poke_rewards.models.reward import RewardRecord


class GameEvent(BaseModel):
    """Kind-tagged event submitted by a game client."""

    player_id: str = Field(..., min_length=1, description="Player ID")
    game: GameKind = Field(..., description="Game kind")
    event_data: dict[str, Any] = Field(default_factory=dict, description="Game payload")


class EventData(BaseModel):
    """Base class for game payloads."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class FlyPokeEventData(EventData):
    """FlyPoke round result."""

    score: int = Field(..., ge=0)
    is_new_high_score: bool = False
    level: int | None = Field(default=None, ge=0)


class BattleEventData(EventData):
    """Battle victory."""

    level: int = Field(..., ge=0)
    streak: int = Field(default=0, ge=0)
    perfect_victory: bool | None = None


class MatchEventData(EventData):
    """PokeMatch round result."""

    perfect: bool = False
    score: int | None = Field(default=None, ge=0)


class DexEventData(EventData):
    """New Pokedex entry."""

    pokemon_id: str = Field(..., min_length=1)
    is_rare: bool = False
    collection_size: int | None = Field(default=None, ge=0)


class LoginEventData(EventData):
    """Daily login. Carries no fields."""


class WelcomeEventData(EventData):
    """Welcome bonus request. Carries no fields."""


EVENT_DATA_MODELS: dict[GameKind, type[EventData]] = {
    GameKind.FLYPOKE: FlyPokeEventData,
    GameKind.BATTLE: BattleEventData,
    GameKind.MATCH: MatchEventData,
    GameKind.DEX: DexEventData,
    GameKind.LOGIN: LoginEventData,
    GameKind.WELCOME: WelcomeEventData,
}


class RewardResponse(BaseModel):
    """Outcome of processing one event."""

    success: bool
    reward: RewardRecord | None = None
    message: str
    daily_limit_reached: bool = False

    @classmethod
    def accepted(cls, reward: RewardRecord, message: str) -> "RewardResponse":
        """Successful outcome carrying the new reward."""
        return cls(success=True, reward=reward, message=message)

    @classmethod
    def rejected(cls, message: str, daily_limit_reached: bool = False) -> "RewardResponse":
        """Policy rejection. Carries no reward."""
        return cls(success=False, message=message, daily_limit_reached=daily_limit_reached)
