import uuid

from duckdb import IntegrityError

from db import connection, rows_to_dicts
from errors import UnknownReferenceError

# -----------------------------
# Catalog Repository
# -----------------------------
# Categories and merchants are shared by every user.


def list_categories(conn=None):
    with connection(conn) as c:
        return rows_to_dicts(c.execute("SELECT id, name, kind FROM categories ORDER BY name"))


def get_category(category_id, conn=None):
    with connection(conn) as c:
        rows = rows_to_dicts(c.execute(
            "SELECT id, name, kind FROM categories WHERE id = ?",
            (category_id,)
        ))
    return rows[0] if rows else None


def list_merchants(conn=None):
    with connection(conn) as c:
        return rows_to_dicts(c.execute("SELECT id, name FROM merchants ORDER BY name"))


def get_merchant(merchant_id, conn=None):
    with connection(conn) as c:
        rows = rows_to_dicts(c.execute(
            "SELECT id, name FROM merchants WHERE id = ?",
            (merchant_id,)
        ))
    return rows[0] if rows else None


def upsert_merchant(name, conn=None):
    """Return the merchant row for ``name``, creating it if missing.

    Names are matched exactly after the caller has trimmed them. A
    concurrent insert of the same name loses the unique constraint race
    and reads back the winner's row.
    """
    with connection(conn) as c:
        row = c.execute("SELECT id, name FROM merchants WHERE name = ?", (name,)).fetchone()
        if row:
            return {"id": row[0], "name": row[1]}

        merchant_id = str(uuid.uuid4())
        try:
            c.execute("INSERT INTO merchants (id, name) VALUES (?, ?)", (merchant_id, name))
        except IntegrityError:
            row = c.execute("SELECT id, name FROM merchants WHERE name = ?", (name,)).fetchone()
            return {"id": row[0], "name": row[1]}
        return {"id": merchant_id, "name": name}


def check_references(category_id=None, merchant_id=None, conn=None):
    """Raise UnknownReferenceError if a given category or merchant id does not exist."""
    if category_id is not None and get_category(category_id, conn=conn) is None:
        raise UnknownReferenceError(f"Unknown category_id {category_id!r}")
    if merchant_id is not None and get_merchant(merchant_id, conn=conn) is None:
        raise UnknownReferenceError(f"Unknown merchant_id {merchant_id!r}")
