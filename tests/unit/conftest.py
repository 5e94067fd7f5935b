"""
Shared fixtures for unit tests.

This module provides event payloads used across multiple test modules:
- FlyPoke high-score round (120 POKE)
- Battle win at level 3 with a 2-win streak (120 POKE)
- Storage that yields to the event loop on every read
"""

import asyncio
from datetime import date
from typing import Any

import pytest

from poke_rewards.models import DailyAggregate, LoginStreakState
from poke_rewards.repositories import MemoryRewardStorage
from poke_rewards.services import RewardEngine
from reward_calculator import RewardTable


PLAYER_ID = "player123"


@pytest.fixture
def player_id() -> str:
    """Default player ID."""
    return PLAYER_ID


@pytest.fixture
def flypoke_event() -> dict[str, Any]:
    """
    FlyPoke event worth 120 POKE (100 tier + 20 high score bonus).

    Returns:
        dict: Raw event envelope
    """
    return {
        "player_id": PLAYER_ID,
        "game": "flypoke",
        "event_data": {"score": 2500, "is_new_high_score": True},
    }


@pytest.fixture
def battle_event() -> dict[str, Any]:
    """
    Battle event worth 120 POKE (50 base + 3 * 20 level + 10 streak).

    Returns:
        dict: Raw event envelope
    """
    return {
        "player_id": PLAYER_ID,
        "game": "battle",
        "event_data": {"level": 3, "streak": 2},
    }


class YieldingMemoryStorage(MemoryRewardStorage):
    """
    Memory storage that suspends on every read.

    Gives concurrent tasks a chance to interleave between a read and the
    write that depends on it, which plain dict access never does.
    """

    async def get_daily_aggregate(self, player_id: str, day: date) -> DailyAggregate | None:
        await asyncio.sleep(0)
        return await super().get_daily_aggregate(player_id, day)

    async def get_login_streak(self, player_id: str) -> LoginStreakState | None:
        await asyncio.sleep(0)
        return await super().get_login_streak(player_id)

    async def has_welcome_reward(self, player_id: str, unclaimed_only: bool = False) -> bool:
        await asyncio.sleep(0)
        return await super().has_welcome_reward(player_id, unclaimed_only)


@pytest.fixture
def yielding_storage() -> YieldingMemoryStorage:
    """Empty storage that yields on reads."""
    return YieldingMemoryStorage()


@pytest.fixture
def yielding_engine(reward_table: RewardTable, yielding_storage: YieldingMemoryStorage, clock) -> RewardEngine:
    """Reward engine over the yielding storage."""
    return RewardEngine(reward_table, yielding_storage, clock=clock)
