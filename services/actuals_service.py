import asyncio
import logging
from datetime import date
from typing import Dict

import config
from errors import StoreError
from repositories.income_repository import sum_income_by_month
from repositories.transactions_repository import sum_spend_by_month
from utils.dates import month_start, next_month

log = logging.getLogger("budget.actuals")


def income_by_month(user_id: str, first: date, last: date, conn=None) -> Dict[str, int]:
    """Recorded income cents per month for [first, last]; empty months absent."""
    return sum_income_by_month(user_id, month_start(first), next_month(last), conn=conn)


def spend_by_month(user_id: str, first: date, last: date, conn=None) -> Dict[str, int]:
    """Recorded spending cents per month for [first, last]; empty months absent."""
    return sum_spend_by_month(user_id, month_start(first), next_month(last), conn=conn)


async def fetch_concurrently(*calls):
    """Run independent blocking store reads in worker threads and join them.

    Each call is a ``(func, *args)`` tuple; results come back in call order.
    The whole batch is bounded by ``config.STORE_TIMEOUT_SECONDS``.

    A timeout only stops the wait. Worker threads cannot be cancelled, so
    reads already running finish in the background and hold their DuckDB
    connections until they do.
    """
    reads = [asyncio.to_thread(func, *args) for func, *args in calls]
    try:
        return await asyncio.wait_for(
            asyncio.gather(*reads),
            timeout=config.STORE_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError as e:
        log.error(f"Store reads timed out after {config.STORE_TIMEOUT_SECONDS}s")
        raise StoreError("store read timed out") from e
