"""
Formatting utilities for token amounts.

Conversion between the integer smallest unit used everywhere in the
reward path and the decimal display unit shown to players.
"""

from decimal import ROUND_DOWN, Decimal
from typing import Union

from reward_calculator.core.models import TOKEN_DECIMALS


def to_display_amount(amount: int, decimals: int = TOKEN_DECIMALS) -> Decimal:
    """
    Convert smallest units to display units, rounding toward zero.

    Args:
        amount: Amount in smallest units
        decimals: Token decimals

    Returns:
        Display amount

    Example:
        >>> to_display_amount(1_500_000_000)
        Decimal('1.5')
    """
    value = Decimal(amount).scaleb(-decimals)
    return value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_DOWN).normalize()


def to_smallest_unit(
    value: Union[Decimal, float, int, str],
    decimals: int = TOKEN_DECIMALS,
) -> int:
    """
    Convert display units to smallest units.

    Fractions below one smallest unit are truncated.

    Args:
        value: Display amount
        decimals: Token decimals

    Returns:
        Amount in smallest units

    Example:
        >>> to_smallest_unit("20")
        20000000000
        >>> to_smallest_unit(0.0000000019)
        1
    """
    scaled = Decimal(str(value)) * (Decimal(10) ** decimals)
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def format_token_amount(
    amount: int,
    symbol: str = "POKE",
    decimals: int = TOKEN_DECIMALS,
    thousands_separator: str = ",",
) -> str:
    """
    Format smallest units as a human-readable token amount.

    Args:
        amount: Amount in smallest units
        symbol: Token symbol
        decimals: Token decimals
        thousands_separator: Separator for thousands

    Returns:
        Formatted string

    Example:
        >>> format_token_amount(120_000_000_000)
        '120 POKE'
        >>> format_token_amount(1_234_500_000_000)
        '1,234.5 POKE'
    """
    display = to_display_amount(amount, decimals)
    formatted = f"{display:,f}"
    if thousands_separator != ",":
        formatted = formatted.replace(",", thousands_separator)
    return f"{formatted} {symbol}"
