"""
PokeWorld Reward Calculator.

Standalone package for game reward amounts.

Example:
    >>> from reward_calculator import (
    ...     DEFAULT_REWARD_TABLE, RewardCalculator, format_token_amount,
    ... )
    >>>
    >>> calc = RewardCalculator(DEFAULT_REWARD_TABLE)
    >>> amount = calc.calculate_flypoke_reward(2500, is_new_high_score=True)
    >>> print(format_token_amount(amount))
    120 POKE
"""

from reward_calculator.constants import (
    DEFAULT_REWARD_TABLE,
    get_default_reward_table,
    get_login_thresholds,
)
from reward_calculator.core.calculator import RewardCalculator
from reward_calculator.core.models import (
    TOKEN_DECIMALS,
    UNITS_PER_TOKEN,
    BattleRewards,
    DexRewards,
    FlyPokeRewards,
    LoginRewards,
    MatchRewards,
    RewardTable,
    ScoreTier,
    WelcomeRewards,
    poke,
)
from reward_calculator.utils import (
    format_token_amount,
    to_display_amount,
    to_smallest_unit,
)


__version__ = "1.0.0"
__all__ = [
    # Core
    "RewardCalculator",
    # Models
    "RewardTable",
    "ScoreTier",
    "FlyPokeRewards",
    "BattleRewards",
    "MatchRewards",
    "DexRewards",
    "LoginRewards",
    "WelcomeRewards",
    # Constants
    "DEFAULT_REWARD_TABLE",
    "TOKEN_DECIMALS",
    "UNITS_PER_TOKEN",
    "poke",
    "get_default_reward_table",
    "get_login_thresholds",
    # Formatters
    "format_token_amount",
    "to_display_amount",
    "to_smallest_unit",
]
