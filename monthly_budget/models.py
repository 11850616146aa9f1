"""Data classes for the per-month budget record.

A :class:`MonthRecord` owns its categories and expenses. Each class knows how
to turn itself into a JSON-ready dict and back again; older layouts written
by the browser version of the tracker are accepted on read.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from .formatting import round_cents


def new_id() -> str:
    return uuid.uuid4().hex


def _to_float(value: Any) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if pd.isna(result) else round_cents(result)


def coerce_date(value: Any) -> date:
    """Accept a ``date``, ``datetime`` or ISO string and return a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(value).date()


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class BudgetCategory:
    id: str
    name: str
    allocated: float
    used: float = 0.0

    @property
    def remaining(self) -> float:
        return self.allocated - self.used

    @property
    def usage_pct(self) -> float:
        return (self.used / self.allocated) * 100 if self.allocated > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'allocated': self.allocated,
            'used': self.used,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BudgetCategory':
        # ``amount`` is the allocation key used by the browser layout
        allocated = data.get('allocated', data.get('amount'))
        return cls(
            id=str(data['id']),
            name=str(data.get('name', '')),
            allocated=_to_float(allocated),
            used=_to_float(data.get('used')),
        )


@dataclass
class Expense:
    id: str
    date: date
    category_id: str
    amount: float
    note: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'date': self.date.isoformat(),
            'category_id': self.category_id,
            'amount': self.amount,
            'note': self.note,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Expense':
        category_id = data.get('category_id', data.get('budgetId'))
        if category_id is None:
            raise KeyError('category_id')
        return cls(
            id=str(data['id']),
            date=coerce_date(data['date']),
            category_id=str(category_id),
            amount=_to_float(data.get('amount')),
            note=data.get('note') or '',
        )


@dataclass
class MonthRecord:
    income: float = 0.0
    disposable: float = 0.0
    budget_categories: List[BudgetCategory] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)

    def find_category(self, category_id: str) -> Optional[BudgetCategory]:
        return next((c for c in self.budget_categories if c.id == category_id), None)

    def find_expense(self, expense_id: str) -> Optional[Expense]:
        return next((e for e in self.expenses if e.id == expense_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'income': self.income,
            'disposable': self.disposable,
            'budget_categories': [c.to_dict() for c in self.budget_categories],
            'expenses': [e.to_dict() for e in self.expenses],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MonthRecord':
        categories = data.get('budget_categories')
        if categories is None:
            categories = data.get('budgetItems') or []
        return cls(
            income=_to_float(data.get('income')),
            disposable=_to_float(data.get('disposable')),
            budget_categories=[BudgetCategory.from_dict(c) for c in categories],
            expenses=[Expense.from_dict(e) for e in data.get('expenses') or []],
        )
