import duckdb
import logging
import uuid
from contextlib import contextmanager

import config
from errors import StoreError

DB_FILE = config.DB_FILE

log = logging.getLogger("budget.db")

DEFAULT_CATEGORIES = (
    ("Income", "income"),
    ("Housing", "expense"),
    ("Utilities", "expense"),
    ("Groceries", "expense"),
    ("Dining", "expense"),
    ("Transport", "expense"),
    ("Subscriptions", "expense"),
    ("Other", "expense"),
)


# -----------------------------
# Get a DB connection
# -----------------------------
def get_db():
    """
    Returns a new DuckDB connection.
    """
    return duckdb.connect(DB_FILE)


@contextmanager
def connection(conn=None):
    """Yield ``conn``, or a fresh connection closed on exit.

    DuckDB failures surface as StoreError so callers never see driver
    details.
    """
    own_conn = conn is None
    try:
        if own_conn:
            conn = get_db()
        yield conn
    except duckdb.Error as e:
        raise StoreError(f"{type(e).__name__}: {e}") from e
    finally:
        if own_conn and conn is not None:
            conn.close()


def rows_to_dicts(result):
    columns = [col[0] for col in result.description]
    return [dict(zip(columns, row)) for row in result.fetchall()]


# -----------------------------
# Initialize database schema
# -----------------------------
def init_db():
    conn = get_db()
    try:
        # Recurring bills and subscriptions
        conn.execute("""
        CREATE TABLE IF NOT EXISTS bills (
            id VARCHAR PRIMARY KEY,
            user_id VARCHAR NOT NULL,
            name VARCHAR NOT NULL,
            amount_cents INTEGER NOT NULL CHECK (amount_cents >= 0),
            cadence VARCHAR NOT NULL CHECK (cadence IN ('weekly','biweekly','monthly','quarterly','annual','once')),
            type VARCHAR NOT NULL DEFAULT 'bill' CHECK (type IN ('bill','subscription')),
            due_day SMALLINT CHECK (due_day BETWEEN 1 AND 31),
            start_date DATE,
            end_date DATE,
            payment_method VARCHAR CHECK (payment_method IN ('credit','debit','cash','ach')),
            notes TEXT,
            UNIQUE(user_id, name)
        );
        """)
        log.info("Bills table ensured.")

        # Shared catalog: categories and merchants are not per user
        conn.execute("""
        CREATE TABLE IF NOT EXISTS categories (
            id VARCHAR PRIMARY KEY,
            name VARCHAR NOT NULL UNIQUE,
            kind VARCHAR NOT NULL CHECK (kind IN ('income','expense'))
        );
        """)
        conn.execute("""
        CREATE TABLE IF NOT EXISTS merchants (
            id VARCHAR PRIMARY KEY,
            name VARCHAR NOT NULL UNIQUE
        );
        """)
        log.info("Catalog tables ensured.")

        # Income
        conn.execute("""
        CREATE TABLE IF NOT EXISTS income (
            id VARCHAR PRIMARY KEY,
            user_id VARCHAR NOT NULL,
            date DATE NOT NULL,
            amount_cents INTEGER NOT NULL,
            source VARCHAR NOT NULL,
            category_id VARCHAR,
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log.info("Income table ensured.")

        # Spending transactions
        conn.execute("""
        CREATE TABLE IF NOT EXISTS transactions (
            id VARCHAR PRIMARY KEY,
            user_id VARCHAR NOT NULL,
            date DATE NOT NULL,
            amount_cents INTEGER NOT NULL,
            merchant_id VARCHAR,
            merchant_name VARCHAR,
            category_id VARCHAR,
            method VARCHAR NOT NULL CHECK (method IN ('credit','debit','cash','ach')),
            notes TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """)
        log.info("Transactions table ensured.")

        # Savings baseline, one row per user
        conn.execute("""
        CREATE TABLE IF NOT EXISTS assumptions (
            user_id VARCHAR PRIMARY KEY,
            current_savings_cents BIGINT NOT NULL,
            as_of_date DATE NOT NULL,
            savings_apr DECIMAL(5,2) DEFAULT 0.00,
            inflation_pct DECIMAL(5,2) DEFAULT 0.00
        );
        """)
        log.info("Assumptions table ensured.")

        # Indexes
        conn.execute("CREATE INDEX IF NOT EXISTS idx_income_user_date ON income(user_id, date);")
        conn.execute("CREATE INDEX IF NOT EXISTS idx_tx_user_date ON transactions(user_id, date);")
        conn.execute("CREATE INDEX IF NOT EXISTS idx_tx_user_category ON transactions(user_id, category_id);")
        log.info("Indexes created/ensured.")

        # Default categories
        for name, kind in DEFAULT_CATEGORIES:
            conn.execute(
                """
                INSERT INTO categories (id, name, kind)
                SELECT ?, ?, ?
                WHERE NOT EXISTS (SELECT 1 FROM categories WHERE name = ?)
                """,
                (str(uuid.uuid4()), name, kind, name)
            )
        log.info("Default categories ensured.")

    except duckdb.Error as e:
        log.error(f"Error initializing DB: {e}")
        raise
    finally:
        conn.close()
        log.info("Database setup complete and connection closed.")
