from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class Cadence(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"
    ONCE = "once"


class BillType(str, Enum):
    BILL = "bill"
    SUBSCRIPTION = "subscription"


class PaymentMethod(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"
    CASH = "cash"
    ACH = "ach"


@dataclass(frozen=True)
class RecurringBill:
    """A user's recurring bill or subscription.

    ``start_date`` and ``end_date`` are both inclusive; ``None`` means
    unbounded on that side. ``type``, ``due_day``, ``payment_method`` and
    ``notes`` are display-only and never enter the forecast.
    """
    id: str
    user_id: str
    name: str
    amount_cents: int
    cadence: Cadence
    type: BillType = BillType.BILL
    due_day: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = None
    notes: Optional[str] = None

    def __post_init__(self):
        # Coerce raw store values; an unknown cadence fails here.
        object.__setattr__(self, "cadence", Cadence(self.cadence))
        object.__setattr__(self, "type", BillType(self.type))
        if self.payment_method is not None:
            object.__setattr__(self, "payment_method", PaymentMethod(self.payment_method))
        if self.amount_cents < 0:
            raise ValueError("amount_cents must be non-negative")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "amount_cents": self.amount_cents,
            "cadence": self.cadence.value,
            "type": self.type.value,
            "due_day": self.due_day,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "payment_method": self.payment_method.value if self.payment_method else None,
            "notes": self.notes,
        }
