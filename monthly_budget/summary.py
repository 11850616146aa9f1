"""Budget summary tables and banding for the presentation layer.

This module turns the store's state into pandas DataFrames that the
dashboard renders directly, and maps a health score onto its qualitative
band.
"""

from __future__ import annotations

from typing import Dict, Tuple

import pandas as pd

from .config import (
    HEALTH_BANDS,
    HEALTH_NO_DATA,
    HEALTH_TOP_BAND,
    TREND_MONTHS,
    USAGE_OVER_PCT,
    USAGE_WARNING_PCT,
)
from .formatting import round_cents
from .months import month_label, recent_month_keys
from .store import BudgetStore

CATEGORY_COLUMNS = ['ID', 'Category', 'Allocated', 'Used', 'Remaining', 'Usage %', 'Status']
EXPENSE_COLUMNS = ['ID', 'Date', 'Category', 'Amount', 'Note']
TREND_COLUMNS = ['Month', 'Label', 'Income', 'Disposable', 'Budget']


def health_band(score: int) -> Tuple[str, str]:
    """Map a 0-100 health score to a ``(label, description)`` pair.

    Example:
        >>> health_band(40)[0]
        'fair'
    """
    if score == 0:
        return 'no data', HEALTH_NO_DATA
    for upper, label, description in HEALTH_BANDS:
        if score < upper:
            return label, description
    return HEALTH_TOP_BAND


def usage_status(usage_pct: float) -> str:
    """Classify category usage as ``ok``, ``warning`` or ``over``."""
    if usage_pct > USAGE_OVER_PCT:
        return 'over'
    if usage_pct > USAGE_WARNING_PCT:
        return 'warning'
    return 'ok'


def category_usage_frame(store: BudgetStore) -> pd.DataFrame:
    """Create DataFrame of the current month's categories in insertion order.

    Returns:
        DataFrame with columns: ID, Category, Allocated, Used, Remaining,
        Usage %, Status
    """
    rows = []
    for category in store.get_current_month().budget_categories:
        usage = category.usage_pct
        rows.append({
            'ID': category.id,
            'Category': category.name,
            'Allocated': category.allocated,
            'Used': category.used,
            'Remaining': category.remaining,
            'Usage %': usage,
            'Status': usage_status(usage),
        })
    return pd.DataFrame(rows, columns=CATEGORY_COLUMNS)


def expense_frame(store: BudgetStore) -> pd.DataFrame:
    """Create DataFrame of the current month's expenses, newest first."""
    rows = [
        {
            'ID': expense.id,
            'Date': pd.Timestamp(expense.date),
            'Category': store.category_name(expense.category_id),
            'Amount': expense.amount,
            'Note': expense.note,
        }
        for expense in store.sorted_expenses()
    ]
    return pd.DataFrame(rows, columns=EXPENSE_COLUMNS)


def trend_frame(store: BudgetStore, months: int = TREND_MONTHS) -> pd.DataFrame:
    """Income, disposable and total budget for the months up to the cursor.

    Months with no record count as zero and are not created.

    Returns:
        DataFrame with columns: Month, Label, Income, Disposable, Budget
    """
    rows = []
    for key in recent_month_keys(store.current_month_key(), months):
        record = store.peek_month(key)
        rows.append({
            'Month': key,
            'Label': month_label(key),
            'Income': record.income,
            'Disposable': record.disposable,
            'Budget': round_cents(sum(c.allocated for c in record.budget_categories)),
        })
    return pd.DataFrame(rows, columns=TREND_COLUMNS)


def month_summary(store: BudgetStore) -> Dict[str, object]:
    """Headline figures for the current month."""
    record = store.get_current_month()
    score = store.health_score()
    label, description = health_band(score)
    return {
        'month': store.current_month_key(),
        'income': record.income,
        'disposable': record.disposable,
        'total_allocated': store.total_allocated(),
        'total_used': store.total_used(),
        'remaining_budget': store.remaining_budget(),
        'remaining_after_disposable': store.remaining_after_disposable(),
        'health_score': score,
        'health_label': label,
        'health_description': description,
    }
