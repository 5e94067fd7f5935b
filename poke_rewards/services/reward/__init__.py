"""
Reward services package.

This package provides modular reward processing:
- reward_engine: Event intake and dispatch, query entry points
- game_reward_processor: Daily-limited game rewards
- login_streak_processor: Daily login streaks
- welcome_bonus_processor: One-time welcome bonus
- daily_aggregate_handler: Per-day totals and limit checks
- player_rewards: Player reward queries and claims

All components are re-exported for easy importing.
"""

from poke_rewards.services.reward.daily_aggregate_handler import DailyAggregateHandler
from poke_rewards.services.reward.game_reward_processor import GameRewardProcessor
from poke_rewards.services.reward.login_streak_processor import LoginStreakProcessor
from poke_rewards.services.reward.player_rewards import PlayerRewardManager
from poke_rewards.services.reward.reward_engine import RewardEngine
from poke_rewards.services.reward.welcome_bonus_processor import WelcomeBonusProcessor

__all__ = [
    "RewardEngine",
    "GameRewardProcessor",
    "LoginStreakProcessor",
    "WelcomeBonusProcessor",
    "DailyAggregateHandler",
    "PlayerRewardManager",
]
