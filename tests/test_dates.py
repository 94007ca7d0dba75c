from datetime import date

import pytest

from errors import InvalidMonthKeyError
from utils.dates import iter_months, month_end, month_key, next_month, parse_month_key


def test_parse_month_key_returns_first_of_month():
    assert parse_month_key("2025-03") == date(2025, 3, 1)
    assert parse_month_key("1999-12") == date(1999, 12, 1)


@pytest.mark.parametrize("value", ["2025-13", "2025-00", "2025-1", "25-01", "2025-01-01", "", "abcd-ef", None])
def test_parse_month_key_rejects_malformed(value):
    with pytest.raises(InvalidMonthKeyError) as exc:
        parse_month_key(value, field="start")
    assert "YYYY-MM" in str(exc.value)
    assert exc.value.field == "start"


def test_invalid_month_key_is_a_value_error():
    with pytest.raises(ValueError):
        parse_month_key("2025-13")


def test_month_key_zero_pads():
    assert month_key(date(2025, 1, 31)) == "2025-01"
    assert month_key(date(987, 7, 1)) == "0987-07"


def test_month_end_handles_leap_february():
    assert month_end(date(2024, 2, 10)) == date(2024, 2, 29)
    assert month_end(date(2025, 2, 1)) == date(2025, 2, 28)
    assert month_end(date(2025, 12, 5)) == date(2025, 12, 31)


def test_next_month_rolls_year():
    assert next_month(date(2025, 12, 15)) == date(2026, 1, 1)
    assert next_month(date(2025, 1, 31)) == date(2025, 2, 1)


def test_iter_months_is_inclusive_and_crosses_years():
    months = list(iter_months(date(2025, 11, 20), date(2026, 2, 3)))
    assert [month_key(m) for m in months] == ["2025-11", "2025-12", "2026-01", "2026-02"]


def test_iter_months_empty_when_reversed():
    assert list(iter_months(date(2025, 3, 1), date(2025, 2, 1))) == []


def test_month_keys_sort_chronologically():
    keys = [month_key(m) for m in iter_months(date(2024, 8, 1), date(2025, 3, 1))]
    assert keys == sorted(keys)
