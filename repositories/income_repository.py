import uuid

from db import connection, rows_to_dicts

# -----------------------------
# Income Repository
# -----------------------------


def insert_income(user_id, date, amount_cents, source, notes=None, category_id=None, conn=None):
    row = {
        "id": str(uuid.uuid4()),
        "user_id": user_id,
        "date": date,
        "amount_cents": amount_cents,
        "source": source,
        "category_id": category_id,
        "notes": notes,
    }
    with connection(conn) as c:
        c.execute(
            """
            INSERT INTO income (id, user_id, date, amount_cents, source, category_id, notes)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (row["id"], user_id, date, amount_cents, source, category_id, notes)
        )
    return row


def list_income(user_id, start, end, conn=None):
    """
    Returns income rows dated in [start, end), oldest first.
    """
    with connection(conn) as c:
        return rows_to_dicts(c.execute(
            """
            SELECT id, user_id, date, amount_cents, source, category_id, notes
            FROM income
            WHERE user_id = ? AND date >= ? AND date < ?
            ORDER BY date
            """,
            (user_id, start, end)
        ))


def delete_income(income_id, user_id, conn=None) -> bool:
    with connection(conn) as c:
        deleted = c.execute(
            "DELETE FROM income WHERE id = ? AND user_id = ? RETURNING id",
            (income_id, user_id)
        ).fetchall()
    return bool(deleted)


def sum_income_by_month(user_id, start, end, conn=None):
    """
    Returns {YYYY-MM: cents} for income dated in [start, end).
    Months without rows are absent.
    """
    with connection(conn) as c:
        rows = c.execute(
            """
            SELECT strftime(date, '%Y-%m') AS month_key,
                   CAST(SUM(amount_cents) AS BIGINT) AS cents
            FROM income
            WHERE user_id = ? AND date >= ? AND date < ?
            GROUP BY 1
            ORDER BY 1
            """,
            (user_id, start, end)
        ).fetchall()
    return {r[0]: int(r[1]) for r in rows}
