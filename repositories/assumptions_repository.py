from db import connection, rows_to_dicts
from models.assumptions import Assumptions


def get_assumptions(user_id, conn=None):
    """
    Return the user's savings baseline, or None if it was never set.
    """
    with connection(conn) as c:
        rows = rows_to_dicts(c.execute(
            """
            SELECT user_id, current_savings_cents, as_of_date, savings_apr, inflation_pct
            FROM assumptions
            WHERE user_id = ?
            """,
            (user_id,)
        ))
    return Assumptions(**rows[0]) if rows else None


def upsert_assumptions(user_id, current_savings_cents, as_of_date,
                       savings_apr=None, inflation_pct=None, conn=None):
    """
    Insert or replace the user's baseline and return it.

    On update, an omitted apr/inflation keeps the stored value; on insert
    it defaults to 0.
    """
    with connection(conn) as c:
        existing = get_assumptions(user_id, conn=c)

        if existing is None:
            c.execute(
                """
                INSERT INTO assumptions
                (user_id, current_savings_cents, as_of_date, savings_apr, inflation_pct)
                VALUES (?, ?, ?, ?, ?)
                """,
                (user_id, current_savings_cents, as_of_date,
                 savings_apr if savings_apr is not None else 0,
                 inflation_pct if inflation_pct is not None else 0)
            )
        else:
            c.execute(
                """
                UPDATE assumptions
                SET current_savings_cents = ?, as_of_date = ?, savings_apr = ?, inflation_pct = ?
                WHERE user_id = ?
                """,
                (current_savings_cents, as_of_date,
                 savings_apr if savings_apr is not None else existing.savings_apr,
                 inflation_pct if inflation_pct is not None else existing.inflation_pct,
                 user_id)
            )

        return get_assumptions(user_id, conn=c)
