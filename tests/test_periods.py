from __future__ import annotations

from datetime import date

import pytest

from payroll_desk.core import periods
from payroll_desk.core.validation import ValidationError


@pytest.mark.parametrize("value", ["13-2025", "2025-01", "1-2025", "", None])
def test_parse_month_rejects_malformed_keys(value):
    with pytest.raises(ValidationError):
        periods.parse_month(value)


def test_days_in_month_follows_the_calendar():
    assert periods.days_in_month("02-2024") == 29
    assert periods.days_in_month("02-2025") == 28
    assert periods.days_in_month("04-2025") == 30


def test_shift_month_crosses_years():
    assert periods.shift_month("01-2025", -1) == "12-2024"
    assert periods.shift_month("11-2024", 3) == "02-2025"
    assert periods.month_key(date(2025, 3, 9)) == "03-2025"


def test_months_sort_chronologically():
    keys = ["12-2024", "01-2025", "02-2023"]

    assert sorted(keys, key=periods.month_sort_key) == ["02-2023", "12-2024", "01-2025"]


def test_contains():
    assert periods.contains("01-2025", date(2025, 1, 31))
    assert not periods.contains("01-2025", date(2024, 1, 15))
