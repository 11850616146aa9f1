"""Amount parsing and currency formatting."""

from __future__ import annotations

import math
import numbers
from typing import Union

from .config import CURRENCY_SYMBOL
from .exceptions import InvalidAmount

_CURRENCY_PREFIXES = ("$", "¥", "€", "£")


def round_cents(amount: float) -> float:
    """Round an amount to whole cents, never returning ``-0.0``.

    Example:
        >>> round_cents(0.1 + 0.2)
        0.3
    """
    return round(amount, 2) + 0.0


def parse_amount(value: Union[str, int, float]) -> float:
    """Parse a user-supplied amount into a non-negative float in whole cents.

    Accepts numbers and numeric strings. Whitespace, thousands separators
    and a leading currency symbol are ignored.

    Args:
        value: The raw amount, typically text from a form field

    Returns:
        The parsed amount, rounded to cents

    Raises:
        InvalidAmount: If the value is not numeric, not finite, or negative

    Example:
        >>> parse_amount(" $1,234.50 ")
        1234.5
        >>> parse_amount(200)
        200.0
    """
    if isinstance(value, bool):
        raise InvalidAmount(value)
    if isinstance(value, numbers.Real):
        amount = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if text.startswith(_CURRENCY_PREFIXES):
            text = text[1:].strip()
        if not text:
            raise InvalidAmount(value, "empty")
        try:
            amount = float(text)
        except ValueError:
            raise InvalidAmount(value) from None
    else:
        raise InvalidAmount(value)

    if not math.isfinite(amount):
        raise InvalidAmount(value, "not finite")
    if amount < 0:
        raise InvalidAmount(value, "negative")
    return round_cents(amount)


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with proper formatting.

    Args:
        amount: The amount to format
        include_sign: Whether to include the currency symbol

    Returns:
        Formatted currency string (e.g., "$1,234.56" or "1,234.56")

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-20, include_sign=False)
        '-20.00'
    """
    formatted = f"{abs(amount):,.2f}"
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{formatted}" if include_sign else f"{sign}{formatted}"

