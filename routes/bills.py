from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field, model_validator

from errors import NotFoundError
from models.bill import BillType, Cadence, PaymentMethod
from repositories.bills_repository import delete_bill, insert_bill, list_bills, update_bill_type
from routes.deps import get_user_id
from utils.money import to_cents

router = APIRouter()


class BillCreate(BaseModel):
    name: str = Field(..., min_length=1)
    amount_cents: Optional[int] = Field(None, ge=0)
    amount: Optional[Decimal] = Field(None, ge=0)
    cadence: Cadence
    type: BillType = BillType.BILL
    due_day: Optional[int] = Field(None, ge=1, le=31)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = None
    notes: Optional[str] = Field(None, max_length=10_000)

    @model_validator(mode="after")
    def require_amount(self):
        if self.amount_cents is None and self.amount is None:
            raise ValueError("Provide amount_cents or amount")
        return self

    def resolved_cents(self) -> int:
        if self.amount_cents is not None:
            return self.amount_cents
        return to_cents(self.amount)


class BillTypeUpdate(BaseModel):
    type: BillType


@router.get("/bills")
def get_bills(type: str = Query("bill", pattern="^(bill|subscription|all)$"),
              user_id: str = Depends(get_user_id)):
    return [b.to_dict() for b in list_bills(user_id, bill_type=type)]


@router.get("/subscriptions")
def get_subscriptions(user_id: str = Depends(get_user_id)):
    return [b.to_dict() for b in list_bills(user_id, bill_type=BillType.SUBSCRIPTION.value)]


@router.post("/bills", status_code=201)
def create_bill(bill: BillCreate, user_id: str = Depends(get_user_id)):
    created = insert_bill(
        user_id=user_id,
        name=bill.name.strip(),
        amount_cents=bill.resolved_cents(),
        cadence=bill.cadence,
        bill_type=bill.type,
        due_day=bill.due_day,
        start_date=bill.start_date,
        end_date=bill.end_date,
        payment_method=bill.payment_method,
        notes=bill.notes,
    )
    return created.to_dict()


@router.patch("/bills/{bill_id}")
def patch_bill_type(bill_id: str, update: BillTypeUpdate, user_id: str = Depends(get_user_id)):
    if not update_bill_type(bill_id, user_id, update.type.value):
        raise NotFoundError("Bill not found")
    return {"ok": True}


@router.delete("/bills/{bill_id}")
def remove_bill(bill_id: str, user_id: str = Depends(get_user_id)):
    if not delete_bill(bill_id, user_id):
        raise NotFoundError("Bill not found")
    return {"ok": True}
