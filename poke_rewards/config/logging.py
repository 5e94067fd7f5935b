"""
Logging configuration.

Configures the loguru logger: stderr sink plus an optional rotating file.
"""

import sys

from loguru import logger

from poke_rewards.config.settings import Settings


def setup_logging(settings: Settings) -> None:
    """
    Configure logger with file rotation.

    Args:
        settings: Application settings
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        backtrace=settings.debug,
        diagnose=settings.debug,
    )

    if settings.log_file:
        logger.add(
            settings.log_file,
            rotation="1 day",
            retention="7 days",
            level=settings.log_level,
            encoding="utf-8",
            serialize=settings.is_production,
        )

    logger.info(
        "Logging configured",
        extra={"environment": settings.environment, "level": settings.log_level},
    )
