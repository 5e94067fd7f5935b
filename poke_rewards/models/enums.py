"""
Enumerations for the reward domain.
"""

from enum import Enum


class GameKind(str, Enum):
    """Game kinds that can earn rewards."""

    FLYPOKE = "flypoke"
    BATTLE = "battle"
    MATCH = "match"
    DEX = "dex"
    LOGIN = "login"
    WELCOME = "welcome"

    @classmethod
    def _missing_(cls, value: object) -> "GameKind | None":
        if isinstance(value, str):
            normalized = value.strip().lower()
            normalized = LEGACY_GAME_NAMES.get(normalized, normalized)
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    def __str__(self) -> str:
        return self.value


# Wire names used by older clients
LEGACY_GAME_NAMES = {
    "pokematch": "match",
    "pokedex": "dex",
}

# Games whose rewards count toward the daily aggregate
AGGREGATED_GAMES = (
    GameKind.FLYPOKE,
    GameKind.BATTLE,
    GameKind.MATCH,
    GameKind.DEX,
    GameKind.LOGIN,
)
