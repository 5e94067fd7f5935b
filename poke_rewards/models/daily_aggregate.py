"""
Daily aggregate model.

Per-player, per-UTC-day running totals of rewards by game.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, computed_field

from poke_rewards.models.enums import AGGREGATED_GAMES, GameKind


class DailyAggregate(BaseModel):
    """
    DailyAggregate entity.

    Keyed by (player_id, date). Buckets only grow. ``total`` is always
    derived from the buckets so it cannot drift from their sum.
    """

    model_config = ConfigDict(frozen=True)

    player_id: str = Field(..., min_length=1)
    date: dt.date
    flypoke: int = Field(default=0, ge=0)
    battle: int = Field(default=0, ge=0)
    match: int = Field(default=0, ge=0)
    dex: int = Field(default=0, ge=0)
    login: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        """Sum of all game buckets."""
        return self.flypoke + self.battle + self.match + self.dex + self.login

    @classmethod
    def empty(cls, player_id: str, day: dt.date) -> "DailyAggregate":
        """Zero aggregate for a player and day."""
        return cls(player_id=player_id, date=day)

    def amount_for(self, game: GameKind) -> int:
        """
        Get the running sum for one game.

        Games without a bucket (welcome) always report zero.
        """
        if game not in AGGREGATED_GAMES:
            return 0
        return getattr(self, game.value)

    def add(self, game: GameKind, amount: int) -> "DailyAggregate":
        """
        Return a copy with ``amount`` added to the game's bucket.

        Args:
            game: Game kind (welcome is not aggregated)
            amount: Amount in smallest units

        Returns:
            Updated aggregate

        Raises:
            ValueError: For welcome rewards or negative amounts
        """
        if game not in AGGREGATED_GAMES:
            raise ValueError(f"{game} rewards are not part of the daily aggregate")
        if amount < 0:
            raise ValueError("Daily aggregate only grows")
        return self.model_copy(update={game.value: self.amount_for(game) + amount})
