from datetime import date
from typing import Dict, Iterable

from models.bill import RecurringBill
from repositories.bills_repository import list_bills
from services.cadence_amortizer import monthly_equivalent_cents
from utils.dates import iter_months, month_key, month_start


def build_bills_plan(bills: Iterable[RecurringBill], first: date, last: date) -> Dict[str, int]:
    """Planned bill cents for every month in [first, last].

    The result is dense: one key per month in range, in ascending order,
    with an explicit 0 where nothing is due. A missing key therefore means
    the month was outside the planned range, never "no bills".
    """
    first = month_start(first)
    last = month_start(last)
    if first > last:
        raise ValueError(f"first month {month_key(first)} is after last month {month_key(last)}")

    bills = list(bills)
    plan = {}
    for month in iter_months(first, last):
        plan[month_key(month)] = sum(monthly_equivalent_cents(b, month) for b in bills)
    return plan


def get_bills_plan(user_id: str, first: date, last: date, conn=None) -> Dict[str, int]:
    """Read the user's bills and plan them over [first, last]. Read-only."""
    bills = list_bills(user_id, bill_type="all", conn=conn)
    return build_bills_plan(bills, first, last)
