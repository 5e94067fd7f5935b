"""Core calculation logic and models."""

from reward_calculator.core.calculator import RewardCalculator
from reward_calculator.core.models import (
    BattleRewards,
    DexRewards,
    FlyPokeRewards,
    LoginRewards,
    MatchRewards,
    RewardTable,
    ScoreTier,
    WelcomeRewards,
)

__all__ = [
    "RewardCalculator",
    "RewardTable",
    "ScoreTier",
    "FlyPokeRewards",
    "BattleRewards",
    "MatchRewards",
    "DexRewards",
    "LoginRewards",
    "WelcomeRewards",
]
