"""Configuration management for the monthly budget tracker.

This module centralizes all configuration values including paths,
display constants, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Tuple

# Base project root - assumes this file is in monthly_budget/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("BUDGET_DATA_DIR", _PROJECT_ROOT / "data"))

# Persisted store (single JSON document holding every month)
STORE_PATH = Path(
    os.getenv("BUDGET_STORE_PATH", DATA_DIR / "budget_data.json")
).resolve()

LOG_LEVEL = os.getenv("BUDGET_LOG_LEVEL", "WARNING").upper()

# Presentation constants
CURRENCY_SYMBOL = os.getenv("BUDGET_CURRENCY_SYMBOL", "$")
TREND_MONTHS = 6
MONTH_SELECT_RANGE = 12

# Category usage thresholds (percent of allocation)
USAGE_WARNING_PCT = 80.0
USAGE_OVER_PCT = 100.0

# Health score bands: (exclusive upper bound, label, description)
HEALTH_BANDS: List[Tuple[int, str, str]] = [
    (30, "poor", "Finances are tight; little is left over to save."),
    (60, "fair", "Finances are fair; consider setting more aside."),
    (80, "good", "Finances are healthy with a reasonable savings share."),
]
HEALTH_TOP_BAND: Tuple[str, str] = (
    "excellent",
    "Finances are excellent with a high savings share.",
)
HEALTH_NO_DATA = "Enter monthly income and budget figures to see an analysis."


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=(level or LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
