"""Calendar-month helpers. Months are represented by their first day, in UTC."""
import calendar
import re
from datetime import date, datetime, timezone

from errors import InvalidMonthKeyError

MONTH_KEY_RE = re.compile(r"^\d{4}-\d{2}$")


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def month_start(d: date) -> date:
    return date(d.year, d.month, 1)


def month_end(d: date) -> date:
    """Last calendar day of ``d``'s month."""
    last_day = calendar.monthrange(d.year, d.month)[1]
    return date(d.year, d.month, last_day)


def next_month(d: date) -> date:
    if d.month == 12:
        return date(d.year + 1, 1, 1)
    return date(d.year, d.month + 1, 1)


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def parse_month_key(value: str, field: str = "month") -> date:
    """``"YYYY-MM"`` -> first day of that month.

    Raises InvalidMonthKeyError for anything else, including ``"2025-13"``
    and ``"2025-1"``.
    """
    if not isinstance(value, str) or not MONTH_KEY_RE.match(value):
        raise InvalidMonthKeyError(value, field)
    year, month = (int(part) for part in value.split("-"))
    if not 1 <= month <= 12 or year < 1:
        raise InvalidMonthKeyError(value, field)
    return date(year, month, 1)


def iter_months(first: date, last: date):
    """Yield the first day of every month in [first, last], inclusive."""
    cursor = month_start(first)
    last = month_start(last)
    while cursor <= last:
        yield cursor
        cursor = next_month(cursor)
