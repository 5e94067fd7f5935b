"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Keep test runs off any developer database or log directory
os.environ.setdefault("POKE_REWARDS_STORAGE_BACKEND", "memory")
os.environ.setdefault("POKE_REWARDS_LOG_FILE", "")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from datetime import UTC, datetime, timedelta

import pytest

from poke_rewards.repositories import MemoryRewardStorage
from poke_rewards.services import RewardEngine
from reward_calculator import RewardTable


class FakeClock:
    """Controllable UTC clock for day transitions."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0, minutes: int = 0) -> datetime:
        """Move the clock forward and return the new time."""
        self.now += timedelta(days=days, hours=hours, minutes=minutes)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at 2025-01-15 12:00 UTC."""
    return FakeClock(datetime(2025, 1, 15, 12, 0, tzinfo=UTC))


@pytest.fixture
def reward_table() -> RewardTable:
    """Default reward table."""
    return RewardTable()


@pytest.fixture
def storage() -> MemoryRewardStorage:
    """Empty in-memory storage."""
    return MemoryRewardStorage()


@pytest.fixture
def engine(reward_table: RewardTable, storage: MemoryRewardStorage, clock: FakeClock) -> RewardEngine:
    """Reward engine over in-memory storage and the fake clock."""
    return RewardEngine(reward_table, storage, clock=clock)
