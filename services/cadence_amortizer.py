"""
Cadence amortizer: spreads a recurring bill onto the monthly grid.

Pure functions: a bill plus a target month in, whole cents out.
No database access; no side effects.
"""
from datetime import date
from decimal import Decimal

from models.bill import Cadence, RecurringBill
from utils.dates import month_end, month_start
from utils.money import round_cents

# Monthly-equivalent factor per cadence, as (numerator, denominator).
# ``once`` is handled separately.
MONTHLY_FACTORS = {
    Cadence.MONTHLY: (1, 1),
    Cadence.WEEKLY: (52, 12),
    Cadence.BIWEEKLY: (26, 12),
    Cadence.QUARTERLY: (1, 3),
    Cadence.ANNUAL: (1, 12),
}


def is_active_in_month(bill: RecurringBill, month: date) -> bool:
    """True when the bill's [start_date, end_date] window touches ``month``."""
    first = month_start(month)
    last = month_end(month)
    starts_by = bill.start_date is None or bill.start_date <= last
    still_running = bill.end_date is None or bill.end_date >= first
    return starts_by and still_running


def monthly_equivalent_cents(bill: RecurringBill, month: date) -> int:
    """
    Cents attributable to ``bill`` in ``month``.

    Args:
        bill: The recurring bill.
        month: Any day in the target month.

    Returns:
        0 when the bill is inactive that month. Otherwise the amount scaled
        by its cadence factor and rounded half-up to whole cents. A ``once``
        bill counts in full only in its start month.
    """
    if not is_active_in_month(bill, month):
        return 0

    if bill.cadence is Cadence.ONCE:
        if bill.start_date is None:
            return 0
        if (bill.start_date.year, bill.start_date.month) == (month.year, month.month):
            return bill.amount_cents
        return 0

    numerator, denominator = MONTHLY_FACTORS[bill.cadence]
    return round_cents(Decimal(bill.amount_cents * numerator) / Decimal(denominator))
