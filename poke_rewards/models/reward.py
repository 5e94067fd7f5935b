"""
Reward record model.

Represents one POKE token reward issued for a game event.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from poke_rewards.models.enums import GameKind
from poke_rewards.utils.datetime_utils import ensure_utc, utc_now


class RewardRecord(BaseModel):
    """
    RewardRecord entity.

    Created exactly once by the reward engine when an event is accepted.
    Records are never deleted; ``claimed`` only ever flips from False to
    True and ``settlement_reference`` is written once by the disbursement
    side, never by the engine.

    Attributes:
        id: Unique reward ID
        player_id: Player the reward belongs to
        game: Game kind that earned the reward
        amount: Reward amount in smallest units
        created_at: Creation time (UTC)
        claimed: Whether the player has claimed the reward
        event_data: Event payload kept for audit and display
        settlement_reference: On-chain transfer reference, once settled
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
    )

    id: UUID = Field(default_factory=uuid4, description="Reward ID")
    player_id: str = Field(..., min_length=1, description="Player ID")
    game: GameKind = Field(..., description="Game kind")
    amount: int = Field(..., ge=0, description="Amount in smallest units")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time (UTC)")
    claimed: bool = Field(default=False, description="Claimed by the player")
    event_data: dict[str, Any] = Field(default_factory=dict, description="Event payload")
    settlement_reference: str | None = Field(
        default=None, description="Transfer reference set by the disburser"
    )

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value: datetime) -> datetime:
        """Store creation time in UTC."""
        return ensure_utc(value)

    @classmethod
    def create(
        cls,
        player_id: str,
        game: GameKind,
        amount: int,
        event_data: dict[str, Any],
        created_at: datetime | None = None,
    ) -> "RewardRecord":
        """
        Build a fresh, unclaimed, unsettled reward record.

        Args:
            player_id: Player ID
            game: Game kind
            amount: Amount in smallest units
            event_data: Event payload
            created_at: Creation time (default: now)

        Returns:
            New RewardRecord with a new ID
        """
        return cls(
            player_id=player_id,
            game=game,
            amount=amount,
            created_at=created_at or utc_now(),
            event_data=event_data,
        )
