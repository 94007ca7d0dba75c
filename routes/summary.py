from datetime import date

from fastapi import APIRouter, Depends, Query

from routes.deps import get_today, get_user_id
from services.summary_service import calculate_monthly_summary

router = APIRouter()


@router.get("/summary")
async def get_summary(
    month: str = Query(""),
    debug: str = Query(""),
    user_id: str = Depends(get_user_id),
    today: date = Depends(get_today),
):
    """Monthly income/spending/net tiles, in currency units."""
    return await calculate_monthly_summary(user_id, month, today=today, debug=debug == "1")
