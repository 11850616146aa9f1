"""Top‑level package for the monthly budget tracker.

The primary modules are:

* ``store`` – the :class:`BudgetStore` holding every month's income,
  categories and expenses
* ``summary`` – DataFrame views and health banding built from the store
* ``visualization`` – functions that generate Plotly figures
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run monthly_budget/dashboard.py
```

or use ``run_dashboard.py`` at the project root.
"""

from .exceptions import (  # noqa: F401
    BudgetError,
    InvalidAmount,
    InvalidMonthKey,
    PersistenceError,
    UnknownCategory,
)
from .models import BudgetCategory, Expense, MonthRecord  # noqa: F401
from .store import BudgetStore  # noqa: F401
from .storage import BudgetFileStorage  # noqa: F401

__all__ = [
    "BudgetStore",
    "BudgetFileStorage",
    "MonthRecord",
    "BudgetCategory",
    "Expense",
    "BudgetError",
    "InvalidAmount",
    "InvalidMonthKey",
    "PersistenceError",
    "UnknownCategory",
]
