"""Exception types raised by the budget store."""

from __future__ import annotations


class BudgetError(Exception):
    """Base class for budget tracker errors."""


class InvalidAmount(BudgetError, ValueError):
    """An amount was non-numeric, not finite, or negative."""

    def __init__(self, value: object, reason: str = "not a valid amount") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"{value!r} is {reason}")


class InvalidMonthKey(BudgetError, ValueError):
    """A month key did not have the ``YYYY-MM`` form."""

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"Invalid month key {key!r}; expected YYYY-MM")


class UnknownCategory(BudgetError, LookupError):
    """An expense referenced a category that does not exist in its month."""

    def __init__(self, category_id: str, month_key: str) -> None:
        self.category_id = category_id
        self.month_key = month_key
        super().__init__(f"No category {category_id!r} in month {month_key}")


class PersistenceError(BudgetError):
    """Writing the store to disk failed.

    The in-memory state is kept; call ``BudgetStore.flush()`` to retry.
    """

    def __init__(self, path: object, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to save budget data to {path}: {cause}")
