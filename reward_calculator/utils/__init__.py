"""
Utility functions for the reward calculator.

Conversion and formatting helpers for token amounts.
"""

from reward_calculator.utils.formatters import (
    format_token_amount,
    to_display_amount,
    to_smallest_unit,
)

__all__ = [
    "format_token_amount",
    "to_display_amount",
    "to_smallest_unit",
]
