"""Database engine setup for the SQLAlchemy reward storage."""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from poke_rewards.config.settings import Settings


def create_database_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create async engine for a database URL.

    In-memory SQLite databases share a single connection, otherwise every
    pooled connection would see its own empty database.

    Args:
        database_url: SQLAlchemy async URL
        echo: Log SQL statements

    Returns:
        AsyncEngine
    """
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        return create_async_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
        )
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
    )


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create async engine from application settings."""
    if not settings.database_url:
        raise ValueError("database_url is not configured")
    return create_database_engine(settings.database_url, echo=settings.database_echo)
