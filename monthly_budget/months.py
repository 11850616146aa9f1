"""Month key helpers.

Months are identified by ``YYYY-MM`` strings. Arithmetic goes through
``pandas.Period`` so that year boundaries roll over correctly.
"""

from __future__ import annotations

import re
from datetime import date
from typing import List, Optional

import pandas as pd

from .exceptions import InvalidMonthKey

_KEY_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def month_key(day: Optional[date] = None) -> str:
    """Return the ``YYYY-MM`` key for ``day`` (today when omitted)."""
    day = day or date.today()
    return f"{day.year:04d}-{day.month:02d}"


def to_period(key: str) -> pd.Period:
    if not isinstance(key, str) or not _KEY_RE.match(key):
        raise InvalidMonthKey(key)
    return pd.Period(key, freq="M")


def validate_month_key(key: str) -> str:
    to_period(key)
    return key


def shift_month(key: str, delta: int) -> str:
    """Shift ``key`` by ``delta`` whole months.

    Example:
        >>> shift_month("2024-12", 1)
        '2025-01'
        >>> shift_month("2024-01", -1)
        '2023-12'
    """
    return str(to_period(key) + int(delta))


def recent_month_keys(key: str, count: int) -> List[str]:
    """Return ``count`` consecutive keys ending at ``key``, oldest first."""
    end = to_period(key)
    return [str(end - offset) for offset in range(count - 1, -1, -1)]


def month_range(center: str, span: int) -> List[str]:
    """Return keys from ``span`` months before ``center`` to ``span`` after."""
    mid = to_period(center)
    return [str(mid + offset) for offset in range(-span, span + 1)]


def month_label(key: str) -> str:
    """Human readable label, e.g. ``"March 2024"``."""
    return to_period(key).strftime("%B %Y")
