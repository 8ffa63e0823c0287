"""
Utility functions for the application.
"""
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]

_WHITESPACE = re.compile(r"\s+")


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without picking up binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value: Number, places: int = 2) -> Decimal:
    """Round a money value for display (half up)."""
    exponent = Decimal(1).scaleb(-places)
    return to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)


def format_money(value: Number, places: int = 2, signed: bool = False) -> str:
    """Format a money value with a fixed number of decimals."""
    rounded = quantize_money(value, places)
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded:+.{places}f}" if signed else f"{rounded:.{places}f}"


def normalize_name(value: str) -> str:
    """Trim and collapse internal whitespace."""
    return _WHITESPACE.sub(" ", value).strip()
