from datetime import date
from typing import Optional

from fastapi import Header

from errors import UnauthenticatedError
from utils.dates import utc_today


def get_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Caller identity, set by the authenticating proxy in front of the API."""
    if not x_user_id or not x_user_id.strip():
        raise UnauthenticatedError("Unauthenticated")
    return x_user_id.strip()


def get_today() -> date:
    """Reference date for past/current/future month classification."""
    return utc_today()
