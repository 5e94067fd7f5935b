"""
Pure reward calculator for game events.

This module contains standalone calculation logic with no
dependency on storage or engine state.
"""

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from reward_calculator.core.models import RewardTable


class RewardCalculator:
    """
    Pure business logic calculator for game rewards.

    Every method maps the fields relevant to one game onto an integer
    amount in the smallest token unit. Inputs are assumed to be validated
    upstream; the calculator never fails.
    """

    def __init__(self, table: "RewardTable") -> None:
        """
        Initialize calculator.

        Args:
            table: Reward configuration
        """
        self.table = table

    def calculate_flypoke_reward(self, score: int, is_new_high_score: bool) -> int:
        """
        Calculate FlyPoke reward from the score tier.

        The highest tier whose ``min_score`` the score reaches wins; a new
        high score adds a flat bonus on top.

        Args:
            score: Final game score
            is_new_high_score: Whether the score beats the player's record

        Returns:
            Reward amount

        Example:
            >>> calc = RewardCalculator(RewardTable())
            >>> calc.calculate_flypoke_reward(1500, False)
            50000000000
        """
        config = self.table.flypoke
        amount = config.score_tiers[0].amount
        for tier in config.score_tiers:
            if score >= tier.min_score:
                amount = tier.amount

        if is_new_high_score:
            amount += config.high_score_bonus
        return amount

    def calculate_battle_reward(self, level: int, streak: int) -> int:
        """
        Calculate Battle reward.

        Formula: base + level * per_level_bonus + streak_bonus

        The streak bonus is a step function, not additive: the high bonus
        applies from ``high_streak`` wins, the low bonus from ``low_streak``.

        Args:
            level: Opponent level
            streak: Current win streak

        Returns:
            Reward amount

        Example:
            >>> calc = RewardCalculator(RewardTable())
            >>> calc.calculate_battle_reward(3, 2)
            120000000000
        """
        config = self.table.battle

        if streak >= config.high_streak:
            streak_bonus = config.streak_bonus_high
        elif streak >= config.low_streak:
            streak_bonus = config.streak_bonus_low
        else:
            streak_bonus = 0

        return config.base_reward + level * config.per_level_bonus + streak_bonus

    def calculate_match_reward(self, is_perfect: bool) -> int:
        """Calculate PokeMatch reward, with a flat bonus for a perfect game."""
        config = self.table.match
        if is_perfect:
            return config.base_reward + config.perfect_bonus
        return config.base_reward

    def calculate_dex_reward(self, is_rare: bool) -> int:
        """Calculate Pokedex reward, with a flat bonus for a rare catch."""
        config = self.table.dex
        if is_rare:
            return config.base_reward + config.rare_bonus
        return config.base_reward

    def calculate_login_reward(self, streak: int) -> int:
        """
        Calculate daily login reward for a streak length.

        Streak thresholds are checked highest first, so a 7-day streak
        gets the 7-day bonus even though it also satisfies the 3-day one.
        Without a satisfied threshold the flat daily reward applies.

        Args:
            streak: Current login streak length (>= 1)

        Returns:
            Reward amount
        """
        config = self.table.login
        for threshold in sorted(config.streak_rewards, reverse=True):
            if streak >= threshold:
                return config.streak_rewards[threshold]
        return config.daily_reward

    def get_welcome_reward(self) -> int:
        """Get the fixed welcome bonus amount."""
        return self.table.welcome.reward
