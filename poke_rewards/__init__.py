"""
PokeWorld reward engine.

Turns game events into token rewards under per-game daily caps, a login
streak ladder and a one-time welcome bonus.

Example:
    >>> from poke_rewards import create_reward_engine
    >>>
    >>> engine = create_reward_engine()
    >>> response = await engine.process_event({
    ...     "player_id": "player123",
    ...     "game": "battle",
    ...     "event_data": {"level": 3, "streak": 2},
    ... })
    >>> response.success
    True
"""

from collections.abc import Callable
from datetime import datetime

from loguru import logger

from poke_rewards.config.database import create_engine_from_settings
from poke_rewards.config.settings import Settings, get_settings
from poke_rewards.models import GameEvent, GameKind, RewardRecord, RewardResponse
from poke_rewards.repositories import (
    MemoryRewardStorage,
    RewardStorage,
    SqlAlchemyRewardStorage,
)
from poke_rewards.services import RewardEngine
from poke_rewards.utils.datetime_utils import utc_now


__version__ = "1.0.0"


def create_storage(settings: Settings) -> RewardStorage:
    """
    Create the storage backend selected in settings.

    SQL tables are not created here; call
    ``SqlAlchemyRewardStorage.create_tables()`` once at startup.

    Args:
        settings: Application settings

    Returns:
        RewardStorage implementation
    """
    if settings.storage_backend == "sqlalchemy":
        logger.info("Using SQLAlchemy reward storage")
        return SqlAlchemyRewardStorage(create_engine_from_settings(settings))

    logger.info("Using in-memory reward storage")
    return MemoryRewardStorage()


def create_reward_engine(
    settings: Settings | None = None,
    storage: RewardStorage | None = None,
    clock: Callable[[], datetime] | None = None,
) -> RewardEngine:
    """
    Build a reward engine from settings.

    Args:
        settings: Application settings (loaded from the environment if None)
        storage: Storage override (built from settings if None)
        clock: UTC clock override

    Returns:
        RewardEngine
    """
    settings = settings or get_settings()
    if storage is None:
        storage = create_storage(settings)
    return RewardEngine(
        settings.reward_table,
        storage,
        clock=clock or utc_now,
        token_symbol=settings.token_symbol,
    )


__all__ = [
    "create_reward_engine",
    "create_storage",
    "RewardEngine",
    "RewardStorage",
    "MemoryRewardStorage",
    "SqlAlchemyRewardStorage",
    "Settings",
    "GameKind",
    "GameEvent",
    "RewardRecord",
    "RewardResponse",
]
