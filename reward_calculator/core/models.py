"""Pydantic models for the reward table."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


TOKEN_DECIMALS = 9
UNITS_PER_TOKEN = 10**TOKEN_DECIMALS


def poke(amount: int) -> int:
    """Whole POKE tokens expressed in the smallest unit."""
    return amount * UNITS_PER_TOKEN


class ScoreTier(BaseModel):
    """FlyPoke score tier: scores at or above ``min_score`` earn ``amount``."""

    model_config = ConfigDict(frozen=True)

    min_score: int = Field(..., ge=0, description="Lowest score in this tier")
    amount: int = Field(..., ge=0, description="Tier reward in smallest units")


class FlyPokeRewards(BaseModel):
    """FlyPoke reward configuration."""

    model_config = ConfigDict(frozen=True)

    score_tiers: tuple[ScoreTier, ...] = Field(
        default=(
            ScoreTier(min_score=0, amount=poke(10)),
            ScoreTier(min_score=501, amount=poke(25)),
            ScoreTier(min_score=1001, amount=poke(50)),
            ScoreTier(min_score=2000, amount=poke(100)),
        ),
        description="Score breakpoints, lowest first",
    )
    high_score_bonus: int = Field(default=poke(20), ge=0)
    daily_limit: int | None = Field(default=poke(500), ge=0)

    @field_validator("score_tiers")
    @classmethod
    def validate_tiers(cls, tiers: tuple[ScoreTier, ...]) -> tuple[ScoreTier, ...]:
        """Tiers must start at zero and increase strictly in score and amount."""
        if not tiers:
            raise ValueError("At least one FlyPoke score tier is required")
        if tiers[0].min_score != 0:
            raise ValueError("The first FlyPoke score tier must start at 0")
        for lower, upper in zip(tiers, tiers[1:]):
            if upper.min_score <= lower.min_score:
                raise ValueError("FlyPoke tier breakpoints must be strictly increasing")
            if upper.amount <= lower.amount:
                raise ValueError("FlyPoke tier amounts must be strictly increasing")
        return tiers


class BattleRewards(BaseModel):
    """Battle reward configuration."""

    model_config = ConfigDict(frozen=True)

    base_reward: int = Field(default=poke(50), ge=0)
    per_level_bonus: int = Field(default=poke(20), ge=0)
    low_streak: int = Field(default=2, ge=1, description="Win streak for the low bonus")
    high_streak: int = Field(default=3, ge=1, description="Win streak for the high bonus")
    streak_bonus_low: int = Field(default=poke(10), ge=0)
    streak_bonus_high: int = Field(default=poke(20), ge=0)
    daily_limit: int | None = Field(default=poke(300), ge=0)

    @model_validator(mode="after")
    def validate_streaks(self) -> "BattleRewards":
        """High streak threshold must sit above the low one."""
        if self.high_streak <= self.low_streak:
            raise ValueError("high_streak must be greater than low_streak")
        return self


class MatchRewards(BaseModel):
    """PokeMatch reward configuration."""

    model_config = ConfigDict(frozen=True)

    base_reward: int = Field(default=poke(20), ge=0)
    perfect_bonus: int = Field(default=poke(100), ge=0)
    daily_limit: int | None = Field(default=poke(200), ge=0)


class DexRewards(BaseModel):
    """Pokedex reward configuration. Uncapped unless a limit is set."""

    model_config = ConfigDict(frozen=True)

    base_reward: int = Field(default=poke(10), ge=0)
    rare_bonus: int = Field(default=poke(100), ge=0)
    daily_limit: int | None = Field(default=None, ge=0)


class LoginRewards(BaseModel):
    """Daily login reward and streak bonus ladder."""

    model_config = ConfigDict(frozen=True)

    daily_reward: int = Field(default=poke(20), ge=0)
    streak_rewards: dict[int, int] = Field(
        default_factory=lambda: {3: poke(30), 7: poke(50)},
        description="Streak length threshold -> reward replacing the daily reward",
    )

    @field_validator("streak_rewards")
    @classmethod
    def validate_streak_rewards(cls, rewards: dict[int, int]) -> dict[int, int]:
        """Thresholds are positive streak lengths, bonuses non-negative."""
        for threshold, amount in rewards.items():
            if threshold < 1:
                raise ValueError(f"Streak threshold must be >= 1, got {threshold}")
            if amount < 0:
                raise ValueError(f"Streak reward must be >= 0, got {amount}")
        return rewards


class WelcomeRewards(BaseModel):
    """One-time welcome bonus."""

    model_config = ConfigDict(frozen=True)

    reward: int = Field(default=poke(100), ge=0)


class RewardTable(BaseModel):
    """Complete reward configuration.

    Immutable once built so an engine sees the same table for its whole
    lifetime.
    """

    model_config = ConfigDict(frozen=True)

    token_decimals: int = Field(default=TOKEN_DECIMALS, ge=0, le=18)
    flypoke: FlyPokeRewards = Field(default_factory=FlyPokeRewards)
    battle: BattleRewards = Field(default_factory=BattleRewards)
    match: MatchRewards = Field(default_factory=MatchRewards)
    dex: DexRewards = Field(default_factory=DexRewards)
    login: LoginRewards = Field(default_factory=LoginRewards)
    welcome: WelcomeRewards = Field(default_factory=WelcomeRewards)
