from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from repositories.assumptions_repository import get_assumptions, upsert_assumptions
from routes.deps import get_user_id
from utils.money import to_cents

router = APIRouter()


class AssumptionsUpdate(BaseModel):
    current_savings: Decimal = Field(..., ge=0)
    as_of_date: date
    apr: Optional[Decimal] = Field(None, ge=0, le=100)
    inflation: Optional[Decimal] = Field(None, ge=0, le=100)


@router.get("/settings/assumptions")
def read_assumptions(user_id: str = Depends(get_user_id)):
    assumptions = get_assumptions(user_id)
    return assumptions.to_dict() if assumptions else None


@router.put("/settings/assumptions")
def write_assumptions(update: AssumptionsUpdate, user_id: str = Depends(get_user_id)):
    saved = upsert_assumptions(
        user_id=user_id,
        current_savings_cents=to_cents(update.current_savings),
        as_of_date=update.as_of_date,
        savings_apr=update.apr,
        inflation_pct=update.inflation,
    )
    return saved.to_dict()
