from datetime import date
from decimal import Decimal

import pytest

import db
from errors import ConflictError, UnknownReferenceError
from models.bill import BillType, Cadence
from repositories.assumptions_repository import get_assumptions, upsert_assumptions
from repositories.bills_repository import (
    delete_bill,
    get_bill,
    insert_bill,
    list_bills,
    update_bill_type,
)
from repositories.catalog_repository import (
    check_references,
    get_category,
    list_categories,
    list_merchants,
    upsert_merchant,
)
from repositories.income_repository import delete_income, insert_income, list_income
from repositories.transactions_repository import insert_transaction, list_transactions
from services.actuals_service import income_by_month, spend_by_month


def test_income_sums_per_month_within_range(db_file):
    insert_income("u1", date(2025, 1, 1), 1000, "Salary")
    insert_income("u1", date(2025, 1, 31), 500, "Bonus")
    insert_income("u1", date(2025, 2, 1), 700, "Salary")
    insert_income("u1", date(2025, 4, 1), 900, "Salary")
    insert_income("u1", date(2024, 12, 31), 300, "Gift")
    insert_income("u2", date(2025, 1, 10), 99999, "Salary")

    totals = income_by_month("u1", date(2025, 1, 1), date(2025, 3, 1))

    assert totals == {"2025-01": 1500, "2025-02": 700}


def test_spend_sums_per_month_and_skips_empty_months(db_file):
    insert_transaction("u1", date(2025, 3, 2), 1250, "debit", merchant_name="Grocer")
    insert_transaction("u1", date(2025, 3, 31), 250, "credit")
    insert_transaction("u1", date(2025, 5, 1), 4000, "cash")

    totals = spend_by_month("u1", date(2025, 3, 15), date(2025, 5, 15))

    assert totals == {"2025-03": 1500, "2025-05": 4000}


def test_list_and_delete_income(db_file):
    row = insert_income("u1", date(2025, 1, 3), 1000, "Salary", notes="January")
    insert_income("u1", date(2025, 2, 3), 1000, "Salary")

    rows = list_income("u1", date(2025, 1, 1), date(2025, 2, 1))
    assert [r["id"] for r in rows] == [row["id"]]
    assert rows[0]["notes"] == "January"

    assert delete_income(row["id"], "u2") is False
    assert delete_income(row["id"], "u1") is True
    assert list_income("u1", date(2025, 1, 1), date(2025, 2, 1)) == []


def test_list_transactions_orders_by_date(db_file):
    insert_transaction("u1", date(2025, 1, 20), 100, "debit")
    insert_transaction("u1", date(2025, 1, 5), 200, "debit")

    rows = list_transactions("u1", date(2025, 1, 1), date(2025, 2, 1))

    assert [r["amount_cents"] for r in rows] == [200, 100]


def test_bill_round_trip_and_type_filter(db_file):
    rent = insert_bill("u1", "Rent", 150000, "monthly", due_day=1,
                       start_date=date(2025, 1, 1), payment_method="ach")
    insert_bill("u1", "Netflix", 1599, "monthly", bill_type="subscription")

    stored = get_bill(rent.id, "u1")
    assert stored == rent
    assert stored.cadence is Cadence.MONTHLY
    assert stored.start_date == date(2025, 1, 1)

    assert [b.name for b in list_bills("u1")] == ["Rent"]
    assert [b.name for b in list_bills("u1", bill_type="subscription")] == ["Netflix"]
    assert [b.name for b in list_bills("u1", bill_type="all")] == ["Netflix", "Rent"]


def test_duplicate_bill_name_conflicts(db_file):
    insert_bill("u1", "Rent", 150000, "monthly")
    with pytest.raises(ConflictError):
        insert_bill("u1", "Rent", 1, "monthly")
    # Same name for another user is fine
    insert_bill("u2", "Rent", 1, "monthly")


def test_update_and_delete_bill(db_file):
    bill = insert_bill("u1", "Gym", 4000, "monthly")

    assert update_bill_type(bill.id, "u1", "subscription") is True
    assert get_bill(bill.id, "u1").type is BillType.SUBSCRIPTION
    assert update_bill_type("missing", "u1", "bill") is False

    assert delete_bill(bill.id, "u2") is False
    assert delete_bill(bill.id, "u1") is True
    assert get_bill(bill.id, "u1") is None


def test_assumptions_upsert_keeps_rates_when_omitted(db_file):
    assert get_assumptions("u1") is None

    first = upsert_assumptions("u1", 500000, date(2025, 1, 1), savings_apr=Decimal("4.25"))
    assert first.current_savings_cents == 500000
    assert first.savings_apr == Decimal("4.25")
    assert first.inflation_pct == Decimal("0")

    second = upsert_assumptions("u1", 650000, date(2025, 3, 1))
    assert second.current_savings_cents == 650000
    assert second.as_of_date == date(2025, 3, 1)
    assert second.savings_apr == Decimal("4.25")


def test_default_categories_seeded_once(db_file):
    db.init_db()

    categories = list_categories()
    names = [c["name"] for c in categories]
    assert len(names) == len(set(names)) == len(db.DEFAULT_CATEGORIES)
    assert get_category(categories[0]["id"]) == categories[0]
    assert get_category("missing") is None


def test_upsert_merchant_is_idempotent(db_file):
    first = upsert_merchant("Grocer")
    second = upsert_merchant("Grocer")

    assert first == second
    assert list_merchants() == [first]


def test_check_references(db_file):
    category_id = list_categories()[0]["id"]
    merchant_id = upsert_merchant("Grocer")["id"]

    check_references()
    check_references(category_id=category_id, merchant_id=merchant_id)
    with pytest.raises(UnknownReferenceError):
        check_references(category_id="nope")
    with pytest.raises(UnknownReferenceError):
        check_references(category_id=category_id, merchant_id="nope")


def test_transaction_keeps_catalog_links(db_file):
    category_id = list_categories()[0]["id"]
    merchant_id = upsert_merchant("Grocer")["id"]
    insert_transaction("u1", date(2025, 1, 2), 100, "debit", merchant_name="Grocer",
                       category_id=category_id, merchant_id=merchant_id)
    insert_income("u1", date(2025, 1, 2), 100, "Salary", category_id=category_id)

    txn = list_transactions("u1", date(2025, 1, 1), date(2025, 2, 1))[0]
    assert (txn["category_id"], txn["merchant_id"]) == (category_id, merchant_id)
    assert list_income("u1", date(2025, 1, 1), date(2025, 2, 1))[0]["category_id"] == category_id
