from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Assumptions:
    """Savings baseline for one user.

    ``savings_apr`` and ``inflation_pct`` are stored and returned but the
    forecast fold is purely additive and does not apply them.
    """
    user_id: str
    current_savings_cents: int
    as_of_date: date
    savings_apr: Optional[Decimal] = None
    inflation_pct: Optional[Decimal] = None

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "current_savings_cents": self.current_savings_cents,
            "as_of_date": self.as_of_date.isoformat(),
            "savings_apr": float(self.savings_apr) if self.savings_apr is not None else None,
            "inflation_pct": float(self.inflation_pct) if self.inflation_pct is not None else None,
        }
