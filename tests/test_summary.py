from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from monthly_budget import summary
from monthly_budget.models import Expense
from monthly_budget.storage import BudgetFileStorage
from monthly_budget.store import UNKNOWN_CATEGORY_NAME, BudgetStore


def _make_store(tmp_path: Path) -> BudgetStore:
    return BudgetStore(BudgetFileStorage(tmp_path / 'budget.json'), today=date(2024, 3, 15))


@pytest.mark.parametrize(
    'score, label',
    [(0, 'no data'), (1, 'poor'), (29, 'poor'), (30, 'fair'), (59, 'fair'), (60, 'good'), (79, 'good'), (80, 'excellent'), (100, 'excellent')],
)
def test_health_band(score, label):
    assert summary.health_band(score)[0] == label


@pytest.mark.parametrize('usage, status', [(0, 'ok'), (80, 'ok'), (80.1, 'warning'), (100, 'warning'), (101, 'over')])
def test_usage_status(usage, status):
    assert summary.usage_status(usage) == status


def test_category_usage_frame(tmp_path: Path) -> None:
    store = _make_store(tmp_path)
    food = store.add_category('Food', 400)
    store.add_category('Fun', 0)
    store.add_expense('2024-03-01', food.id, 500)

    frame = summary.category_usage_frame(store)
    assert list(frame.columns) == summary.CATEGORY_COLUMNS
    assert frame['Category'].tolist() == ['Food', 'Fun']
    food_row = frame.iloc[0]
    assert food_row['Remaining'] == -100
    assert food_row['Usage %'] == 125
    assert food_row['Status'] == 'over'
    assert frame.iloc[1]['Usage %'] == 0


def test_category_usage_frame_empty(tmp_path: Path) -> None:
    frame = summary.category_usage_frame(_make_store(tmp_path))
    assert frame.empty
    assert list(frame.columns) == summary.CATEGORY_COLUMNS


def test_expense_frame_sorted_and_named(tmp_path: Path) -> None:
    store = _make_store(tmp_path)
    food = store.add_category('Food', 400)
    store.add_expense('2024-03-01', food.id, 10, 'bread')
    store.add_expense('2024-03-12', food.id, 20)
    store.get_current_month().expenses.append(
        Expense(id='orphan', date=date(2024, 3, 5), category_id='gone', amount=5.0)
    )

    frame = summary.expense_frame(store)
    assert frame['Amount'].tolist() == [20, 5, 10]
    assert frame['Category'].tolist() == ['Food', UNKNOWN_CATEGORY_NAME, 'Food']
    assert frame.iloc[0]['Date'] == pd.Timestamp('2024-03-12')


def test_trend_frame_covers_recent_months_without_creating_them(tmp_path: Path) -> None:
    store = _make_store(tmp_path)
    store.set_income(5000)
    store.set_disposable(3000)
    store.add_category('Food', 1000)
    store.add_category('Rent', 1200)

    frame = summary.trend_frame(store)
    assert frame['Month'].tolist() == ['2023-10', '2023-11', '2023-12', '2024-01', '2024-02', '2024-03']
    last = frame.iloc[-1]
    assert (last['Income'], last['Disposable'], last['Budget']) == (5000, 3000, 2200)
    assert frame.iloc[0]['Income'] == 0
    assert store.month_keys() == ['2024-03']


def test_month_summary(tmp_path: Path) -> None:
    store = _make_store(tmp_path)
    store.set_income(5000)
    store.set_disposable(3000)
    figures = summary.month_summary(store)
    assert figures['month'] == '2024-03'
    assert figures['remaining_after_disposable'] == 2000
    assert figures['health_score'] == 40
    assert figures['health_label'] == 'fair'
