"""
Services.

Business logic layer.
"""

from poke_rewards.services.disbursement_service import (
    DisbursementResult,
    DisbursementService,
    Disburser,
)
from poke_rewards.services.reward import (
    DailyAggregateHandler,
    GameRewardProcessor,
    LoginStreakProcessor,
    PlayerRewardManager,
    RewardEngine,
    WelcomeBonusProcessor,
)


__all__ = [
    # Reward Services
    "RewardEngine",
    "GameRewardProcessor",
    "LoginStreakProcessor",
    "WelcomeBonusProcessor",
    "DailyAggregateHandler",
    "PlayerRewardManager",
    # Disbursement
    "Disburser",
    "DisbursementService",
    "DisbursementResult",
]
