import uuid

from db import connection, rows_to_dicts

# -----------------------------
# Transactions Repository
# -----------------------------


def insert_transaction(user_id, date, amount_cents, method, merchant_name=None,
                       category_id=None, merchant_id=None, notes=None, conn=None):
    """
    Inserts a spending transaction and returns it as a dict.
    - amount_cents: positive cents spent
    - category_id, merchant_id: catalog ids, already checked by the caller
    """
    row = {
        "id": str(uuid.uuid4()),
        "user_id": user_id,
        "date": date,
        "amount_cents": amount_cents,
        "merchant_id": merchant_id,
        "merchant_name": merchant_name,
        "category_id": category_id,
        "method": method,
        "notes": notes,
    }
    with connection(conn) as c:
        c.execute(
            """
            INSERT INTO transactions
            (id, user_id, date, amount_cents, merchant_id, merchant_name, category_id, method, notes)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (row["id"], user_id, date, amount_cents, merchant_id, merchant_name, category_id,
             method, notes)
        )
    return row


def list_transactions(user_id, start, end, conn=None):
    """
    Returns transactions dated in [start, end), oldest first.
    """
    with connection(conn) as c:
        return rows_to_dicts(c.execute(
            """
            SELECT id, user_id, date, amount_cents, merchant_id, merchant_name, category_id,
                   method, notes
            FROM transactions
            WHERE user_id = ? AND date >= ? AND date < ?
            ORDER BY date
            """,
            (user_id, start, end)
        ))


def delete_transaction(transaction_id, user_id, conn=None) -> bool:
    with connection(conn) as c:
        deleted = c.execute(
            "DELETE FROM transactions WHERE id = ? AND user_id = ? RETURNING id",
            (transaction_id, user_id)
        ).fetchall()
    return bool(deleted)


def sum_spend_by_month(user_id, start, end, conn=None):
    """
    Returns {YYYY-MM: cents} for spending dated in [start, end).
    Months without rows are absent.
    """
    with connection(conn) as c:
        rows = c.execute(
            """
            SELECT strftime(date, '%Y-%m') AS month_key,
                   CAST(SUM(amount_cents) AS BIGINT) AS cents
            FROM transactions
            WHERE user_id = ? AND date >= ? AND date < ?
            GROUP BY 1
            ORDER BY 1
            """,
            (user_id, start, end)
        ).fetchall()
    return {r[0]: int(r[1]) for r in rows}
