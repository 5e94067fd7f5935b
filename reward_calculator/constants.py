"""
Default constants for the reward calculator.

Contains the default PokeWorld reward table (amounts in smallest units,
9 decimals).
"""

from reward_calculator.core.models import RewardTable, UNITS_PER_TOKEN

DEFAULT_REWARD_TABLE = RewardTable()


def get_default_reward_table() -> RewardTable:
    """
    Get the default reward table.

    Returns:
        RewardTable with the platform's standard amounts and limits
    """
    return DEFAULT_REWARD_TABLE


def get_login_thresholds(table: RewardTable = DEFAULT_REWARD_TABLE) -> list[int]:
    """
    Get configured login streak thresholds, highest first.

    Example:
        >>> get_login_thresholds()
        [7, 3]
    """
    return sorted(table.login.streak_rewards, reverse=True)


__all__ = [
    "DEFAULT_REWARD_TABLE",
    "UNITS_PER_TOKEN",
    "get_default_reward_table",
    "get_login_thresholds",
]
