from datetime import date

import pytest

from models.bill import Cadence, RecurringBill
from services.cadence_amortizer import is_active_in_month, monthly_equivalent_cents


def make_bill(amount_cents, cadence, start_date=None, end_date=None, name="Bill"):
    return RecurringBill(
        id=name, user_id="u1", name=name, amount_cents=amount_cents,
        cadence=cadence, start_date=start_date, end_date=end_date,
    )


def test_quarterly_is_a_third_every_active_month():
    bill = make_bill(1200, "quarterly", start_date=date(2025, 1, 1), end_date=date(2025, 12, 31))
    for month in range(1, 13):
        assert monthly_equivalent_cents(bill, date(2025, month, 1)) == 400
    assert monthly_equivalent_cents(bill, date(2024, 12, 1)) == 0
    assert monthly_equivalent_cents(bill, date(2026, 1, 1)) == 0


@pytest.mark.parametrize("cadence, amount, expected", [
    ("monthly", 1599, 1599),
    ("weekly", 1000, 4333),      # 1000 * 52 / 12 = 4333.33
    ("biweekly", 3, 7),          # 3 * 26 / 12 = 6.5, halves round up
    ("biweekly", 200000, 433333),
    ("annual", 12000, 1000),
    ("annual", 6, 1),            # 0.5 rounds up
    ("annual", 5, 0),
    ("quarterly", 1000, 333),
    ("monthly", 0, 0),
])
def test_cadence_factors(cadence, amount, expected):
    bill = make_bill(amount, cadence)
    assert monthly_equivalent_cents(bill, date(2025, 5, 1)) == expected


def test_once_counts_only_in_start_month():
    bill = make_bill(50000, "once", start_date=date(2025, 3, 15))
    assert monthly_equivalent_cents(bill, date(2025, 3, 1)) == 50000
    assert monthly_equivalent_cents(bill, date(2025, 2, 1)) == 0
    assert monthly_equivalent_cents(bill, date(2025, 4, 1)) == 0
    assert monthly_equivalent_cents(bill, date(2026, 3, 1)) == 0


def test_once_without_start_date_never_counts():
    bill = make_bill(50000, "once")
    assert monthly_equivalent_cents(bill, date(2025, 3, 1)) == 0


def test_activation_window_inside_single_month():
    bill = make_bill(2500, "monthly", start_date=date(2025, 6, 10), end_date=date(2025, 6, 20))
    assert monthly_equivalent_cents(bill, date(2025, 6, 1)) == 2500
    assert monthly_equivalent_cents(bill, date(2025, 5, 1)) == 0
    assert monthly_equivalent_cents(bill, date(2025, 7, 1)) == 0


def test_window_edges_are_inclusive():
    ends_on_first = make_bill(100, "monthly", end_date=date(2025, 6, 1))
    starts_on_last = make_bill(100, "monthly", start_date=date(2025, 6, 30))
    assert is_active_in_month(ends_on_first, date(2025, 6, 1))
    assert is_active_in_month(starts_on_last, date(2025, 6, 1))
    assert not is_active_in_month(ends_on_first, date(2025, 7, 1))
    assert not is_active_in_month(starts_on_last, date(2025, 5, 1))


def test_open_ended_bill_is_always_active():
    bill = make_bill(100, "monthly")
    assert is_active_in_month(bill, date(1970, 1, 1))
    assert is_active_in_month(bill, date(2099, 12, 1))


def test_target_month_can_be_any_day():
    bill = make_bill(1200, "quarterly", start_date=date(2025, 6, 10))
    assert monthly_equivalent_cents(bill, date(2025, 6, 28)) == 400


def test_unknown_cadence_is_rejected_at_construction():
    with pytest.raises(ValueError):
        make_bill(100, "fortnightly")


def test_negative_amount_is_rejected():
    with pytest.raises(ValueError):
        make_bill(-1, "monthly")


def test_cadence_is_coerced_to_enum():
    assert make_bill(100, "weekly").cadence is Cadence.WEEKLY
