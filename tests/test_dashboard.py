"""Tests for the dashboard's shared store and error reporting.

Streamlit is replaced with a ``SimpleNamespace`` so no server is needed.
"""

from __future__ import annotations

import threading
import types
from datetime import date

from monthly_budget import dashboard
from monthly_budget.exceptions import InvalidAmount, PersistenceError, UnknownCategory
from monthly_budget.months import month_key
from monthly_budget.storage import BudgetFileStorage
from monthly_budget.store import BudgetStore


def _fake_streamlit(state=None):
    messages = {'error': [], 'warning': []}
    st_mock = types.SimpleNamespace(
        session_state={} if state is None else state,
        error=lambda text: messages['error'].append(text),
        warning=lambda text: messages['warning'].append(text),
    )
    return st_mock, messages


def _shared(tmp_path):
    store = BudgetStore(BudgetFileStorage(tmp_path / 'budget.json'), today=date(2024, 3, 1))
    return store, threading.Lock()


def test_sessions_share_one_store(monkeypatch, tmp_path):
    shared = _shared(tmp_path)
    tab_a, _ = _fake_streamlit({dashboard.CURSOR_STATE_KEY: '2024-03'})
    tab_b, _ = _fake_streamlit({dashboard.CURSOR_STATE_KEY: '2024-03'})

    monkeypatch.setattr(dashboard, 'st', tab_b)
    with dashboard.session_store(shared) as store:
        store.add_category('Food', 100)

    monkeypatch.setattr(dashboard, 'st', tab_a)
    with dashboard.session_store(shared) as store:
        store.set_income(5000)

    record = BudgetFileStorage(tmp_path / 'budget.json').load()['2024-03']
    assert record.income == 5000
    assert [c.name for c in record.budget_categories] == ['Food']


def test_each_session_keeps_its_own_month(monkeypatch, tmp_path):
    shared = _shared(tmp_path)
    tab_a, _ = _fake_streamlit({dashboard.CURSOR_STATE_KEY: '2024-03'})
    tab_b, _ = _fake_streamlit({dashboard.CURSOR_STATE_KEY: '2024-03'})

    monkeypatch.setattr(dashboard, 'st', tab_a)
    with dashboard.session_store(shared) as store:
        store.advance_month(1)
    assert tab_a.session_state[dashboard.CURSOR_STATE_KEY] == '2024-04'

    monkeypatch.setattr(dashboard, 'st', tab_b)
    with dashboard.session_store(shared) as store:
        assert store.current_month_key() == '2024-03'
        store.set_income(1200)

    assert shared[0].peek_month('2024-04').income == 0
    assert shared[0].peek_month('2024-03').income == 1200


def test_new_session_starts_at_todays_month(monkeypatch, tmp_path):
    shared = _shared(tmp_path)
    st_mock, _ = _fake_streamlit()
    monkeypatch.setattr(dashboard, 'st', st_mock)
    with dashboard.session_store(shared) as store:
        assert store.current_month_key() == month_key()
    assert st_mock.session_state[dashboard.CURSOR_STATE_KEY] == month_key()


def test_session_store_holds_lock(monkeypatch, tmp_path):
    store, lock = _shared(tmp_path)
    st_mock, _ = _fake_streamlit({dashboard.CURSOR_STATE_KEY: '2024-03'})
    monkeypatch.setattr(dashboard, 'st', st_mock)
    with dashboard.session_store((store, lock)):
        assert lock.locked()
    assert not lock.locked()


def test_run_action_returns_result(monkeypatch):
    st_mock, messages = _fake_streamlit()
    monkeypatch.setattr(dashboard, 'st', st_mock)
    assert dashboard.run_action(lambda value: value * 2, 21) == 42
    assert messages == {'error': [], 'warning': []}


def test_run_action_reports_invalid_input(monkeypatch):
    st_mock, messages = _fake_streamlit()
    monkeypatch.setattr(dashboard, 'st', st_mock)

    def reject():
        raise InvalidAmount('abc')

    assert dashboard.run_action(reject) is None
    assert messages['error'] == ["'abc' is not a valid amount"]


def test_run_action_reports_unknown_category(monkeypatch):
    st_mock, messages = _fake_streamlit()
    monkeypatch.setattr(dashboard, 'st', st_mock)

    def reject():
        raise UnknownCategory('x', '2024-03')

    assert dashboard.run_action(reject) is None
    assert 'x' in messages['error'][0]


def test_run_action_warns_on_failed_save(monkeypatch):
    st_mock, messages = _fake_streamlit()
    monkeypatch.setattr(dashboard, 'st', st_mock)

    def fail():
        raise PersistenceError('/tmp/budget.json', OSError('disk full'))

    assert dashboard.run_action(fail) is None
    assert messages['error'] == []
    assert 'disk full' in messages['warning'][0]
