from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field, field_validator

from errors import NotFoundError
from repositories.catalog_repository import check_references
from repositories.income_repository import delete_income, insert_income, list_income
from routes.deps import get_user_id
from utils.dates import next_month, parse_month_key
from utils.money import check_two_places, to_cents
from utils.text import blank_to_none

router = APIRouter()


class IncomeCreate(BaseModel):
    date: date
    amount: Decimal = Field(..., gt=0)
    source: str = Field(..., min_length=1, max_length=120)
    category_id: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("amount")
    @classmethod
    def amount_two_places(cls, value):
        return check_two_places(value)

    @field_validator("category_id", mode="before")
    @classmethod
    def empty_id_is_none(cls, value):
        # Forms send "" for "no category"
        return blank_to_none(value) if isinstance(value, str) else value


@router.post("/income")
def add_income(income: IncomeCreate, user_id: str = Depends(get_user_id)):
    check_references(category_id=income.category_id)
    return insert_income(
        user_id=user_id,
        date=income.date,
        amount_cents=to_cents(income.amount),
        source=income.source.strip(),
        category_id=income.category_id,
        notes=blank_to_none(income.notes),
    )


@router.get("/income")
def get_income(month: str = Query(""), user_id: str = Depends(get_user_id)):
    start = parse_month_key(month)
    return list_income(user_id, start, next_month(start))


@router.delete("/income/{income_id}", status_code=204)
def remove_income(income_id: str, user_id: str = Depends(get_user_id)):
    if not delete_income(income_id, user_id):
        raise NotFoundError("Income not found")
    return Response(status_code=204)
