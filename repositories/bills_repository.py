import uuid

from duckdb import IntegrityError

from db import connection, rows_to_dicts
from errors import ConflictError
from models.bill import RecurringBill

# -----------------------------
# Bills Repository
# -----------------------------

BILL_COLUMNS = """
    id, user_id, name, amount_cents, cadence, type, due_day,
    start_date, end_date, payment_method, notes
"""


def _to_bill(row: dict) -> RecurringBill:
    return RecurringBill(**row)


def list_bills(user_id, bill_type="bill", conn=None):
    """
    Returns the user's bills ordered by name.
    - bill_type: 'bill', 'subscription', or 'all'
    """
    query = f"SELECT {BILL_COLUMNS} FROM bills WHERE user_id = ?"
    params = [user_id]

    if bill_type != "all":
        query += " AND type = ?"
        params.append(bill_type)

    query += " ORDER BY name"

    with connection(conn) as c:
        rows = rows_to_dicts(c.execute(query, params))
    return [_to_bill(r) for r in rows]


def get_bill(bill_id, user_id, conn=None):
    with connection(conn) as c:
        rows = rows_to_dicts(c.execute(
            f"SELECT {BILL_COLUMNS} FROM bills WHERE id = ? AND user_id = ?",
            (bill_id, user_id)
        ))
    return _to_bill(rows[0]) if rows else None


def insert_bill(user_id, name, amount_cents, cadence, bill_type="bill",
                due_day=None, start_date=None, end_date=None,
                payment_method=None, notes=None, conn=None):
    """
    Inserts a bill and returns it.
    Raises ConflictError when the user already has a bill with this name.
    """
    bill = RecurringBill(
        id=str(uuid.uuid4()),
        user_id=user_id,
        name=name,
        amount_cents=amount_cents,
        cadence=cadence,
        type=bill_type,
        due_day=due_day,
        start_date=start_date,
        end_date=end_date,
        payment_method=payment_method,
        notes=notes,
    )

    with connection(conn) as c:
        try:
            c.execute(
                f"INSERT INTO bills ({BILL_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    bill.id, bill.user_id, bill.name, bill.amount_cents,
                    bill.cadence.value, bill.type.value, bill.due_day,
                    bill.start_date, bill.end_date,
                    bill.payment_method.value if bill.payment_method else None,
                    bill.notes,
                )
            )
        except IntegrityError as e:
            raise ConflictError(f"A bill named {name!r} already exists") from e
    return bill


def update_bill_type(bill_id, user_id, bill_type, conn=None) -> bool:
    """Reclassify a bill. Returns False when no such bill exists for the user."""
    with connection(conn) as c:
        updated = c.execute(
            "UPDATE bills SET type = ? WHERE id = ? AND user_id = ? RETURNING id",
            (bill_type, bill_id, user_id)
        ).fetchall()
    return bool(updated)


def delete_bill(bill_id, user_id, conn=None) -> bool:
    with connection(conn) as c:
        deleted = c.execute(
            "DELETE FROM bills WHERE id = ? AND user_id = ? RETURNING id",
            (bill_id, user_id)
        ).fetchall()
    return bool(deleted)
