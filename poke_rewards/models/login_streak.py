"""
Login streak model.
"""

from datetime import date, timedelta

from pydantic import BaseModel, ConfigDict, Field


class LoginStreakState(BaseModel):
    """
    Login streak for one player.

    Attributes:
        player_id: Player ID
        current_streak: Consecutive UTC days with a login (>= 1)
        last_login_date: UTC date of the last accepted login
    """

    model_config = ConfigDict(frozen=True)

    player_id: str = Field(..., min_length=1)
    current_streak: int = Field(default=1, ge=1)
    last_login_date: date

    @classmethod
    def first_login(cls, player_id: str, today: date) -> "LoginStreakState":
        """Streak for a player who has never logged in."""
        return cls(player_id=player_id, current_streak=1, last_login_date=today)

    def logged_in_on(self, today: date) -> bool:
        """
        Whether a login on ``today`` is already covered.

        A clock reading earlier than the last accepted login (skew between
        processes sharing a database) counts as the same day.
        """
        return today <= self.last_login_date

    def advance(self, today: date) -> "LoginStreakState":
        """
        Streak after a login on ``today``.

        Consecutive day -> +1, any gap -> reset to 1.

        Raises:
            ValueError: If ``today`` was already processed or is in the past
        """
        if today <= self.last_login_date:
            raise ValueError(
                f"Login on {today} does not follow last login {self.last_login_date}"
            )
        if self.last_login_date == today - timedelta(days=1):
            streak = self.current_streak + 1
        else:
            streak = 1
        return self.model_copy(update={"current_streak": streak, "last_login_date": today})
