"""Configuration: settings, logging and database setup."""

from poke_rewards.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
