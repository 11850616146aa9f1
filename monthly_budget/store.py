"""The budget store: per-month records, mutations and derived metrics.

Every mutation works on the month under the cursor, updates memory, then
writes the whole store back to disk. Each category's ``used`` is a cached
sum of the expenses that reference it; expense mutations keep it in step.
Amounts and totals are held in whole cents.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Dict, List, Optional, Union

from .exceptions import PersistenceError, UnknownCategory
from .formatting import parse_amount, round_cents
from .models import BudgetCategory, Expense, MonthRecord, coerce_date, new_id
from .months import month_key, shift_month, validate_month_key
from .storage import BudgetFileStorage

logger = logging.getLogger(__name__)

Amount = Union[str, int, float]
DateLike = Union[date, str]

UNKNOWN_CATEGORY_NAME = "Unknown category"


class BudgetStore:
    """Owns every :class:`MonthRecord` and the current-month cursor.

    Data is loaded when the store is constructed. The cursor always starts at
    today's month, wherever a previous session left it.
    """

    def __init__(self, storage: Optional[BudgetFileStorage] = None, today: Optional[date] = None):
        self.storage = storage or BudgetFileStorage()
        self.months: Dict[str, MonthRecord] = self.storage.load()
        self.dirty = False
        self._current = month_key(today)
        self.get_or_create_month(self._current)
        logger.info("Budget store loaded %d month(s) from %s", len(self.months), self.storage.path)

    # Month access ------------------------------------------------------------

    def current_month_key(self) -> str:
        return self._current

    def get_or_create_month(self, key: str) -> MonthRecord:
        record = self.months.get(key)
        if record is None:
            validate_month_key(key)
            record = MonthRecord()
            self.months[key] = record
        return record

    def get_current_month(self) -> MonthRecord:
        return self.get_or_create_month(self._current)

    def peek_month(self, key: str) -> MonthRecord:
        """Return the record for ``key`` without storing a new one."""
        return self.months.get(key) or MonthRecord()

    def month_keys(self) -> List[str]:
        return sorted(self.months)

    def advance_month(self, delta: int) -> str:
        self._current = shift_month(self._current, delta)
        self.get_current_month()
        self.flush()
        return self._current

    def set_current_month(self, key: str) -> str:
        self._current = validate_month_key(key)
        self.get_current_month()
        return self._current

    # Persistence ---------------------------------------------------------------

    def flush(self) -> None:
        """Write the whole store to disk.

        Raises:
            PersistenceError: If the write fails. Memory is left untouched
                and ``dirty`` stays set so the caller can retry.
        """
        try:
            self.storage.save(self.months)
        except OSError as e:
            self.dirty = True
            logger.error("Failed to save budget data to %s: %s", self.storage.path, e)
            raise PersistenceError(self.storage.path, e) from e
        self.dirty = False

    # Income ------------------------------------------------------------------

    def set_income(self, amount: Amount) -> float:
        value = parse_amount(amount)
        self.get_current_month().income = value
        self.flush()
        return value

    def set_disposable(self, amount: Amount) -> float:
        value = parse_amount(amount)
        self.get_current_month().disposable = value
        self.flush()
        return value

    # Categories ----------------------------------------------------------------

    def find_category(self, category_id: str) -> Optional[BudgetCategory]:
        return self.get_current_month().find_category(category_id)

    def category_name(self, category_id: str) -> str:
        category = self.find_category(category_id)
        return category.name if category else UNKNOWN_CATEGORY_NAME

    def add_category(self, name: str, allocated: Amount) -> BudgetCategory:
        category = BudgetCategory(id=new_id(), name=name, allocated=parse_amount(allocated))
        self.get_current_month().budget_categories.append(category)
        logger.debug("Added category %s (%s) to %s", category.id, name, self._current)
        self.flush()
        return category

    def update_category(self, category_id: str, name: str, allocated: Amount) -> Optional[BudgetCategory]:
        category = self.find_category(category_id)
        if category is None:
            logger.warning("Category %s not found in %s", category_id, self._current)
            return None
        value = parse_amount(allocated)
        category.name = name
        category.allocated = value
        self.flush()
        return category

    def delete_category(self, category_id: str) -> bool:
        """Remove a category and every expense that references it."""
        record = self.get_current_month()
        before = len(record.budget_categories)
        record.budget_categories = [c for c in record.budget_categories if c.id != category_id]
        record.expenses = [e for e in record.expenses if e.category_id != category_id]
        removed = len(record.budget_categories) < before
        if not removed:
            logger.warning("Category %s not found in %s", category_id, self._current)
        self.flush()
        return removed

    # Expenses ------------------------------------------------------------------

    def find_expense(self, expense_id: str) -> Optional[Expense]:
        return self.get_current_month().find_expense(expense_id)

    def sorted_expenses(self) -> List[Expense]:
        """Expenses of the current month, newest first."""
        return sorted(self.get_current_month().expenses, key=lambda e: e.date, reverse=True)

    def _require_category(self, category_id: str) -> BudgetCategory:
        category = self.find_category(category_id)
        if category is None:
            raise UnknownCategory(category_id, self._current)
        return category

    @staticmethod
    def _adjust_used(category: BudgetCategory, delta: float) -> None:
        # Kept in whole cents so removing the last expense leaves exactly 0
        category.used = round_cents(category.used + delta)

    def add_expense(self, expense_date: DateLike, category_id: str, amount: Amount, note: str = '') -> Expense:
        value = parse_amount(amount)
        day = coerce_date(expense_date)
        category = self._require_category(category_id)

        expense = Expense(id=new_id(), date=day, category_id=category_id, amount=value, note=note or '')
        self.get_current_month().expenses.append(expense)
        self._adjust_used(category, value)
        logger.debug("Added expense %s of %.2f to %s", expense.id, value, category.name)
        self.flush()
        return expense

    def update_expense(
        self,
        expense_id: str,
        expense_date: DateLike,
        category_id: str,
        amount: Amount,
        note: str = '',
    ) -> Optional[Expense]:
        expense = self.find_expense(expense_id)
        if expense is None:
            logger.warning("Expense %s not found in %s", expense_id, self._current)
            return None
        value = parse_amount(amount)
        day = coerce_date(expense_date)
        new_category = self._require_category(category_id)

        old_category = self.find_category(expense.category_id)
        if old_category is not None:
            self._adjust_used(old_category, -expense.amount)

        expense.date = day
        expense.category_id = category_id
        expense.amount = value
        expense.note = note or ''

        self._adjust_used(new_category, value)
        self.flush()
        return expense

    def delete_expense(self, expense_id: str) -> bool:
        record = self.get_current_month()
        expense = record.find_expense(expense_id)
        if expense is None:
            logger.warning("Expense %s not found in %s", expense_id, self._current)
            return False
        category = record.find_category(expense.category_id)
        if category is not None:
            self._adjust_used(category, -expense.amount)
        record.expenses = [e for e in record.expenses if e.id != expense_id]
        self.flush()
        return True

    # Derived metrics -------------------------------------------------------------

    def total_allocated(self) -> float:
        return round_cents(sum(c.allocated for c in self.get_current_month().budget_categories))

    def total_used(self) -> float:
        return round_cents(sum(c.used for c in self.get_current_month().budget_categories))

    def remaining_budget(self) -> float:
        return round_cents(self.get_current_month().disposable - self.total_allocated())

    def remaining_after_disposable(self) -> float:
        record = self.get_current_month()
        return round_cents(record.income - record.disposable)

    def health_score(self) -> int:
        """Share of income left after the disposable allowance, as 0-100."""
        income = self.get_current_month().income
        if income == 0:
            return 0
        score = (self.remaining_after_disposable() / income) * 100
        # Half-up rounding, so 40.5 scores 41
        return int(math.floor(max(0.0, min(100.0, score)) + 0.5))
