import logging
from datetime import date
from typing import Optional

from models.forecast_dto import MonthlySummary
from repositories.bills_repository import list_bills
from services.actuals_service import fetch_concurrently, income_by_month, spend_by_month
from services.bills_planner import build_bills_plan
from services.forecast_service import is_past_month, select_spend
from utils.dates import month_end, month_key, month_start, next_month, parse_month_key, utc_today
from utils.money import cents_to_units

log = logging.getLogger("budget.summary")

DEBUG_BILL_SAMPLE = 5


def build_monthly_summary(month: date, income_cents: int, actual_spend_cents: int,
                          planned_cents: int, current_month: date) -> MonthlySummary:
    """Single-month totals using the same spend rule as the forecast."""
    spending_cents = select_spend(month, actual_spend_cents, planned_cents, current_month)
    return MonthlySummary(
        month=month_key(month),
        income=cents_to_units(income_cents),
        spending=cents_to_units(spending_cents),
        net=cents_to_units(income_cents - spending_cents),
    )


async def calculate_monthly_summary(user_id: str, month_str: str,
                                    today: Optional[date] = None, debug: bool = False) -> dict:
    """Dashboard totals for one month. Does not need an assumptions record."""
    if today is None:
        today = utc_today()
    current_month = month_start(today)
    month = parse_month_key(month_str)
    key = month_key(month)

    log.info(f"Summary request user={user_id} month={key}")

    income, spend, bills = await fetch_concurrently(
        (income_by_month, user_id, month, month),
        (spend_by_month, user_id, month, month),
        (list_bills, user_id, "all"),
    )
    plan = build_bills_plan(bills, month, month)

    income_cents = income.get(key, 0)
    actual_spend_cents = spend.get(key, 0)
    planned_cents = plan[key]

    payload = build_monthly_summary(
        month, income_cents, actual_spend_cents, planned_cents, current_month
    ).to_dict()

    if debug:
        payload["_debug"] = {
            "window": {
                "start": month.isoformat(),
                "end_exclusive": next_month(month).isoformat(),
                "end_of_month_inclusive": month_end(month).isoformat(),
            },
            "actual_spend_cents": actual_spend_cents,
            "planned_bills_cents": planned_cents,
            "picked": "actual" if is_past_month(month, current_month) else "max(actual, planned)",
            "bills_count": len(bills),
            "bills_sample": [
                {k: v for k, v in b.to_dict().items() if k not in ("user_id", "due_day", "payment_method", "notes")}
                for b in bills[:DEBUG_BILL_SAMPLE]
            ],
            "plan": plan,
        }

    return payload
