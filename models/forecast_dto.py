from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class ForecastPoint:
    """One month of the savings trajectory."""
    month_key: str  # YYYY-MM
    net_change_cents: int
    savings_cents: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MonthlySummary:
    """Dashboard tile totals for one month, in currency units."""
    month: str  # YYYY-MM
    income: float
    spending: float
    net: float

    def to_dict(self) -> dict:
        return asdict(self)
