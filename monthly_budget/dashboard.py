"""Streamlit dashboard for the monthly budget tracker.

Run with ``streamlit run monthly_budget/dashboard.py`` or via
``run_dashboard.py``.  The page only talks to :class:`BudgetStore`.

Streamlit serves every browser session from its own thread, so the whole
process shares one store behind a lock. Each session keeps its own month
cursor in ``st.session_state`` and applies it to the shared store while it
holds the lock.
"""

from __future__ import annotations

import sys
import threading
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, Tuple

import streamlit as st

# Streamlit runs this file as a script, so make the package importable
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from monthly_budget import summary, visualization
from monthly_budget.config import MONTH_SELECT_RANGE, configure_logging
from monthly_budget.exceptions import BudgetError, PersistenceError
from monthly_budget.formatting import format_currency
from monthly_budget.months import month_key, month_label, month_range
from monthly_budget.store import BudgetStore


CURSOR_STATE_KEY = 'budget_month'

SharedStore = Tuple[BudgetStore, threading.Lock]


@st.cache_resource
def shared_store() -> SharedStore:
    """The process-wide store and the lock that serialises access to it."""
    return BudgetStore(), threading.Lock()


@contextmanager
def session_store(shared: Optional[SharedStore] = None) -> Iterator[BudgetStore]:
    """Hold the store lock with the cursor moved to this session's month.

    A new session starts at today's month. Whatever month the session ends
    on is remembered for its next run.
    """
    store, lock = shared if shared is not None else shared_store()
    with lock:
        cursor = st.session_state.get(CURSOR_STATE_KEY) or month_key()
        store.set_current_month(cursor)
        try:
            yield store
        finally:
            st.session_state[CURSOR_STATE_KEY] = store.current_month_key()


def _rerun() -> None:
    st.rerun()


def run_action(action: Callable[..., Any], *args: Any) -> Optional[Any]:
    """Call a store mutation and report failures on the page.

    Returns the mutation's result, or ``None`` when it was rejected. A failed
    save still returns ``None`` but the change is kept in memory.
    """
    try:
        return action(*args)
    except PersistenceError as e:
        st.warning(f"Change kept but not saved: {e.cause}. Use 'Retry save' to try again.")
    except BudgetError as e:
        st.error(str(e))
    except ValueError as e:
        st.error(f"Invalid input: {e}")
    return None


# ============================================================================
# Sections
# ============================================================================

def render_month_navigation(store: BudgetStore) -> None:
    current = store.current_month_key()
    prev_col, label_col, next_col = st.columns([1, 3, 1])
    if prev_col.button("◀ Previous", use_container_width=True):
        run_action(store.advance_month, -1)
        _rerun()
    if next_col.button("Next ▶", use_container_width=True):
        run_action(store.advance_month, 1)
        _rerun()

    options = month_range(month_key(), MONTH_SELECT_RANGE)
    if current not in options:
        options = sorted(set(options) | {current})
    selected = label_col.selectbox(
        "Month",
        options,
        index=options.index(current),
        format_func=month_label,
        label_visibility="collapsed",
    )
    if selected != current:
        store.set_current_month(selected)
        _rerun()

    if store.dirty:
        st.warning("Some changes have not been saved to disk.")
        if st.button("Retry save"):
            run_action(store.flush)
            if not store.dirty:
                st.success("Saved.")


def render_metrics(store: BudgetStore) -> None:
    figures = summary.month_summary(store)
    cols = st.columns(5)
    cols[0].metric("Monthly income", format_currency(figures['income']))
    cols[1].metric("Disposable", format_currency(figures['disposable']))
    cols[2].metric("Total budget", format_currency(figures['total_allocated']))
    cols[3].metric("Remaining budget", format_currency(figures['remaining_budget']))
    cols[4].metric("Remaining after disposable", format_currency(figures['remaining_after_disposable']))

    gauge_col, text_col = st.columns([1, 2])
    gauge_col.plotly_chart(
        visualization.create_health_gauge(figures['health_score']),
        use_container_width=True,
    )
    text_col.subheader(f"Health score: {figures['health_score']}%")
    text_col.write(figures['health_description'])


def render_income_forms(store: BudgetStore) -> None:
    record = store.get_current_month()
    income_col, disposable_col = st.columns(2)
    with income_col.form("income_form"):
        income = st.text_input("Monthly income", value=f"{record.income:g}" if record.income else "")
        if st.form_submit_button("Save income") and income:
            if run_action(store.set_income, income) is not None:
                _rerun()
    with disposable_col.form("disposable_form"):
        disposable = st.text_input(
            "Disposable amount",
            value=f"{record.disposable:g}" if record.disposable else "",
        )
        if st.form_submit_button("Save disposable") and disposable:
            if run_action(store.set_disposable, disposable) is not None:
                _rerun()


def render_categories(store: BudgetStore) -> None:
    st.subheader("Budget categories")
    table = summary.category_usage_frame(store)
    if table.empty:
        st.info("Add a budget category to get started.")
    else:
        st.dataframe(
            table.drop(columns=['ID']),
            hide_index=True,
            use_container_width=True,
            column_config={
                'Allocated': st.column_config.NumberColumn(format="%.2f"),
                'Used': st.column_config.NumberColumn(format="%.2f"),
                'Remaining': st.column_config.NumberColumn(format="%.2f"),
                'Usage %': st.column_config.ProgressColumn(min_value=0, max_value=100, format="%.0f%%"),
            },
        )

    with st.expander("Add category"):
        with st.form("add_category_form", clear_on_submit=True):
            name = st.text_input("Name")
            allocated = st.text_input("Allocated amount")
            if st.form_submit_button("Add") and name.strip() and allocated:
                if run_action(store.add_category, name.strip(), allocated) is not None:
                    _rerun()

    categories = store.get_current_month().budget_categories
    if not categories:
        return
    with st.expander("Edit or delete category"):
        category = st.selectbox("Category", categories, format_func=lambda c: c.name, key="edit_category")
        with st.form("edit_category_form"):
            name = st.text_input("Name", value=category.name)
            allocated = st.text_input("Allocated amount", value=f"{category.allocated:g}")
            if st.form_submit_button("Update") and name.strip() and allocated:
                if run_action(store.update_category, category.id, name.strip(), allocated) is not None:
                    _rerun()
        confirm = st.checkbox("Also delete this category's expenses", key="confirm_category_delete")
        if st.button("Delete category", disabled=not confirm):
            run_action(store.delete_category, category.id)
            _rerun()


def render_expenses(store: BudgetStore) -> None:
    st.subheader("Expenses")
    categories = store.get_current_month().budget_categories
    if not categories:
        st.info("Create a budget category before recording expenses.")
    else:
        with st.expander("Add expense"):
            with st.form("add_expense_form", clear_on_submit=True):
                spent_on = st.date_input("Date", value=date.today())
                category = st.selectbox("Category", categories, format_func=lambda c: c.name)
                amount = st.text_input("Amount")
                note = st.text_input("Note")
                if st.form_submit_button("Add expense") and amount:
                    if run_action(store.add_expense, spent_on, category.id, amount, note) is not None:
                        _rerun()

    table = summary.expense_frame(store)
    if table.empty:
        st.info("No expenses recorded this month.")
        return
    st.dataframe(
        table.drop(columns=['ID']),
        hide_index=True,
        use_container_width=True,
        column_config={
            'Date': st.column_config.DateColumn(format="YYYY-MM-DD"),
            'Amount': st.column_config.NumberColumn(format="%.2f"),
        },
    )

    expenses = store.sorted_expenses()
    with st.expander("Edit or delete expense"):
        expense = st.selectbox(
            "Expense",
            expenses,
            format_func=lambda e: f"{e.date.isoformat()} · {store.category_name(e.category_id)} · {format_currency(e.amount)}",
            key="edit_expense",
        )
        ids = [c.id for c in categories]
        with st.form("edit_expense_form"):
            spent_on = st.date_input("Date", value=expense.date)
            category = st.selectbox(
                "Category",
                categories,
                index=ids.index(expense.category_id) if expense.category_id in ids else 0,
                format_func=lambda c: c.name,
            )
            amount = st.text_input("Amount", value=f"{expense.amount:g}")
            note = st.text_input("Note", value=expense.note)
            if st.form_submit_button("Update expense") and amount:
                result = run_action(store.update_expense, expense.id, spent_on, category.id, amount, note)
                if result is not None:
                    _rerun()
        if st.button("Delete expense"):
            run_action(store.delete_expense, expense.id)
            _rerun()


def render_charts(store: BudgetStore) -> None:
    categories = summary.category_usage_frame(store)
    left, right = st.columns(2)
    left.plotly_chart(visualization.create_allocation_doughnut(categories), use_container_width=True)
    right.plotly_chart(visualization.create_usage_bar_chart(categories), use_container_width=True)
    st.plotly_chart(visualization.create_trend_chart(summary.trend_frame(store)), use_container_width=True)


def main() -> None:
    """Main entry point for the budget dashboard."""
    st.set_page_config(page_title="Monthly Budget", page_icon="💰", layout="wide")
    configure_logging()

    with session_store() as store:
        st.header(f"💰 {month_label(store.current_month_key())}")
        render_month_navigation(store)
        render_income_forms(store)
        render_metrics(store)

        budget_tab, expense_tab, chart_tab = st.tabs(["📋 Budget", "🧾 Expenses", "📈 Charts"])
        with budget_tab:
            render_categories(store)
        with expense_tab:
            render_expenses(store)
        with chart_tab:
            render_charts(store)


if __name__ == '__main__':
    main()
