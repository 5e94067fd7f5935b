"""
SQLAlchemy tables for the reward storage.

Amounts are stored as BIGINT smallest units; the domain models in this
package are the only shapes the engine sees.
"""

import datetime as dt
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for reward tables."""


class RewardRow(Base):
    """Reward record row."""

    __tablename__ = "rewards"
    __table_args__ = (
        Index("idx_rewards_player_claimed", "player_id", "claimed"),
        Index("idx_rewards_player_game", "player_id", "game"),
        CheckConstraint("amount >= 0", name="check_reward_amount_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    player_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    game: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    claimed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    event_data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    settlement_reference: Mapped[str | None] = mapped_column(String(128), nullable=True)


class DailyAggregateRow(Base):
    """Daily aggregate row, one per (player, UTC date)."""

    __tablename__ = "daily_aggregates"
    __table_args__ = (
        CheckConstraint(
            "total = flypoke + battle + pokematch + dex + login",
            name="check_daily_aggregate_total",
        ),
    )

    player_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    date: Mapped[dt.date] = mapped_column(Date, primary_key=True)
    flypoke: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    battle: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    match: Mapped[int] = mapped_column("pokematch", BigInteger, default=0, nullable=False)
    dex: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    login: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    total: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)


class LoginStreakRow(Base):
    """Login streak row, one per player."""

    __tablename__ = "login_streaks"
    __table_args__ = (
        CheckConstraint("current_streak >= 1", name="check_login_streak_positive"),
    )

    player_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False)
    last_login_date: Mapped[dt.date] = mapped_column(Date, nullable=False)


class PlayerLockRow(Base):
    """One row per player, locked for the length of a unit of work."""

    __tablename__ = "player_locks"

    player_id: Mapped[str] = mapped_column(String(128), primary_key=True)
