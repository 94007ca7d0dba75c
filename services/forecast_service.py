### Forecast service folds actual and planned spend into a month-by-month savings trajectory.
import logging
from datetime import date
from typing import Dict, List, Optional

import config
from errors import MissingAssumptionsError
from models.assumptions import Assumptions
from models.forecast_dto import ForecastPoint
from repositories.assumptions_repository import get_assumptions
from services.actuals_service import fetch_concurrently, income_by_month, spend_by_month
from services.bills_planner import get_bills_plan
from utils.dates import iter_months, month_key, month_start, parse_month_key, utc_today

log = logging.getLogger("budget.forecast")


def horizon_end() -> date:
    """Last month of the planning horizon: December of the configured year."""
    return date(config.FORECAST_HORIZON_YEAR, 12, 1)


def is_past_month(month: date, current_month: date) -> bool:
    return month_start(month) < month_start(current_month)


def select_spend(month: date, actual_cents: int, planned_cents: int, current_month: date) -> int:
    """Spend that counts for ``month``.

    Past months use what was actually recorded. The current and future
    months use at least the planned bills, without adding them on top of
    actual spend that already covers them.
    """
    if is_past_month(month, current_month):
        return actual_cents
    return max(actual_cents, planned_cents)


def effective_start(requested: date, assumptions: Assumptions) -> date:
    """The forecast never starts before the month the baseline is valid for."""
    return max(month_start(requested), month_start(assumptions.as_of_date))


def build_forecast(
    assumptions: Assumptions,
    income: Dict[str, int],
    spend: Dict[str, int],
    plan: Dict[str, int],
    start: date,
    end: date,
    current_month: date,
) -> List[ForecastPoint]:
    """Deterministic savings trajectory from ``start`` through ``end``.

    Pure function of its inputs: the baseline, per-month actual income and
    spend, per-month planned bills, and the month treated as "now". Months
    missing from any map count as 0. Returns an empty list when the
    clamped start is after ``end``.
    """
    first = effective_start(start, assumptions)
    running = assumptions.current_savings_cents
    timeline = []

    for month in iter_months(first, end):
        key = month_key(month)
        spent = select_spend(month, spend.get(key, 0), plan.get(key, 0), current_month)
        net = income.get(key, 0) - spent
        running += net
        timeline.append(ForecastPoint(month_key=key, net_change_cents=net, savings_cents=running))

    return timeline


async def calculate_forecast(user_id: str, start_key: Optional[str] = None,
                             today: Optional[date] = None) -> List[ForecastPoint]:
    """Load the user's baseline, actuals and bills, then fold the forecast.

    ``start_key`` is a ``YYYY-MM`` string (defaults to the current UTC
    month). Raises InvalidMonthKeyError for a malformed key and
    MissingAssumptionsError when no baseline has been set.
    """
    if today is None:
        today = utc_today()
    current_month = month_start(today)
    requested = parse_month_key(start_key, field="start") if start_key else current_month

    log.info(f"Forecast request user={user_id} start={month_key(requested)}")

    (assumptions,) = await fetch_concurrently((get_assumptions, user_id))
    if assumptions is None:
        raise MissingAssumptionsError(user_id)

    first = effective_start(requested, assumptions)
    last = horizon_end()
    if first > last:
        return []

    income, spend, plan = await fetch_concurrently(
        (income_by_month, user_id, first, last),
        (spend_by_month, user_id, first, last),
        (get_bills_plan, user_id, first, last),
    )

    timeline = build_forecast(assumptions, income, spend, plan, first, last, current_month)
    log.info(f"Forecast built user={user_id} months={len(timeline)} first={month_key(first)}")
    return timeline
