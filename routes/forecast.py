from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from routes.deps import get_today, get_user_id
from services.forecast_service import calculate_forecast

router = APIRouter()


@router.get("/forecast")
async def get_forecast(
    start: Optional[str] = Query(None, description="First month, YYYY-MM. Defaults to the current UTC month."),
    user_id: str = Depends(get_user_id),
    today: date = Depends(get_today),
):
    """
    Return the month-by-month savings forecast through the planning horizon.

    Each item is ``{"month_key", "net_change_cents", "savings_cents"}``.
    Past months count recorded spending; the current and later months
    count at least the planned bills.

    Errors:
        400 for a malformed ``start``; 412 when no assumptions are set.
    """
    timeline = await calculate_forecast(user_id, start_key=start, today=today)
    return [point.to_dict() for point in timeline]
