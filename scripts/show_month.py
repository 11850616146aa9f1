#!/usr/bin/env python3
"""Print a month's budget summary, categories and expenses."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from monthly_budget import summary
from monthly_budget.config import configure_logging
from monthly_budget.formatting import format_currency
from monthly_budget.months import month_label
from monthly_budget.storage import BudgetFileStorage
from monthly_budget.store import BudgetStore


def main(month: Optional[str] = None, path: Optional[Path] = None) -> None:
    store = BudgetStore(BudgetFileStorage(path))
    if month:
        store.set_current_month(month)

    figures = summary.month_summary(store)
    print(f"{month_label(store.current_month_key())} ({store.current_month_key()})")
    for label, key in [
        ('Income', 'income'),
        ('Disposable', 'disposable'),
        ('Total budget', 'total_allocated'),
        ('Total used', 'total_used'),
        ('Remaining budget', 'remaining_budget'),
        ('Remaining after disposable', 'remaining_after_disposable'),
    ]:
        print(f"  {label:<28}{format_currency(figures[key]):>14}")
    print(f"  {'Health score':<28}{figures['health_score']:>13}%  ({figures['health_label']})")

    categories = summary.category_usage_frame(store)
    print("\nCategories:")
    if categories.empty:
        print("  (none)")
    else:
        print(categories.drop(columns=['ID']).to_string(index=False, float_format=lambda v: f"{v:,.2f}"))

    expenses = summary.expense_frame(store)
    print("\nExpenses:")
    if expenses.empty:
        print("  (none)")
    else:
        expenses['Date'] = expenses['Date'].dt.strftime('%Y-%m-%d')
        print(expenses.drop(columns=['ID']).to_string(index=False, float_format=lambda v: f"{v:,.2f}"))


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show the budget summary for a month.')
    parser.add_argument('--month', help='Month key (YYYY-MM); defaults to the current month')
    parser.add_argument('--data', type=Path, help='Path to the budget data file')
    args = parser.parse_args()
    configure_logging()
    main(month=args.month, path=args.data)
