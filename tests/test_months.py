from datetime import date

import pytest

from monthly_budget.exceptions import InvalidMonthKey
from monthly_budget.months import (
    month_key,
    month_label,
    month_range,
    recent_month_keys,
    shift_month,
    validate_month_key,
)


def test_month_key_pads_month():
    assert month_key(date(2024, 3, 9)) == '2024-03'


def test_shift_month_crosses_years():
    assert shift_month('2024-12', 1) == '2025-01'
    assert shift_month('2024-01', -1) == '2023-12'
    assert shift_month('2024-06', 18) == '2025-12'


def test_recent_month_keys_oldest_first():
    assert recent_month_keys('2024-02', 4) == ['2023-11', '2023-12', '2024-01', '2024-02']


def test_month_range_is_centred():
    keys = month_range('2024-01', 2)
    assert keys == ['2023-11', '2023-12', '2024-01', '2024-02', '2024-03']


def test_month_label():
    assert month_label('2024-03') == 'March 2024'


@pytest.mark.parametrize('bad', ['2024-3', '2024-00', '2024-13', '24-01', '', None, '2024/01'])
def test_invalid_keys_rejected(bad):
    with pytest.raises(InvalidMonthKey):
        validate_month_key(bad)
