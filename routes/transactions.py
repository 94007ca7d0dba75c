from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field, field_validator

from errors import NotFoundError
from models.bill import PaymentMethod
from repositories.catalog_repository import check_references
from repositories.transactions_repository import (
    delete_transaction,
    insert_transaction,
    list_transactions,
)
from routes.deps import get_user_id
from utils.dates import next_month, parse_month_key
from utils.money import check_two_places, to_cents
from utils.text import blank_to_none

router = APIRouter()


class TransactionCreate(BaseModel):
    date: date
    amount: Decimal = Field(..., gt=0)
    merchant_id: Optional[str] = None
    merchant_name: Optional[str] = Field(None, max_length=1000)
    category_id: Optional[str] = None
    method: PaymentMethod
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("amount")
    @classmethod
    def amount_two_places(cls, value):
        return check_two_places(value)

    @field_validator("merchant_id", "category_id", mode="before")
    @classmethod
    def empty_id_is_none(cls, value):
        return blank_to_none(value) if isinstance(value, str) else value


# -------------------------
# SPENDING
# -------------------------

@router.post("/transactions")
def add_transaction(txn: TransactionCreate, user_id: str = Depends(get_user_id)):
    check_references(category_id=txn.category_id, merchant_id=txn.merchant_id)
    return insert_transaction(
        user_id=user_id,
        date=txn.date,
        amount_cents=to_cents(txn.amount),
        method=txn.method.value,
        merchant_name=blank_to_none(txn.merchant_name),
        category_id=txn.category_id,
        merchant_id=txn.merchant_id,
        notes=blank_to_none(txn.notes),
    )


@router.get("/transactions")
def get_transactions(month: str = Query(""), user_id: str = Depends(get_user_id)):
    start = parse_month_key(month)
    return list_transactions(user_id, start, next_month(start))


@router.delete("/transactions/{transaction_id}", status_code=204)
def remove_transaction(transaction_id: str, user_id: str = Depends(get_user_id)):
    if not delete_transaction(transaction_id, user_id):
        raise NotFoundError("Transaction not found")
    return Response(status_code=204)
