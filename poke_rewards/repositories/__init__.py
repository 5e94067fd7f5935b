"""
Reward storage backends.
"""

from poke_rewards.repositories.base import RewardStorage
from poke_rewards.repositories.memory_storage import MemoryRewardStorage
from poke_rewards.repositories.sqlalchemy_storage import SqlAlchemyRewardStorage

__all__ = [
    "RewardStorage",
    "MemoryRewardStorage",
    "SqlAlchemyRewardStorage",
]
