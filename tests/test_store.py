import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError, OperationalError

from app.errors import StoreError
from models import Expense


def raw_insert(db_session, category="Groceries", amount=1.0):
    db_session.execute(
        text(
            "INSERT INTO expenses (description, amount, category, date, created_at, updated_at) "
            "VALUES ('raw', :amount, :category, '2024-01-01', '2024-01-01 00:00:00', '2024-01-01 00:00:00')"
        ),
        {"amount": amount, "category": category},
    )
    db_session.commit()


def test_table_rejects_unknown_category(db_session):
    with pytest.raises(IntegrityError):
        raw_insert(db_session, category="Snacks")
    db_session.rollback()
    assert db_session.query(Expense).count() == 0


@pytest.mark.parametrize("amount", [-1, 1000000])
def test_table_rejects_out_of_range_amount(db_session, amount):
    with pytest.raises(IntegrityError):
        raw_insert(db_session, amount=amount)
    db_session.rollback()


def test_table_accepts_valid_row(db_session):
    raw_insert(db_session, category="Clothing & Footwear")
    assert db_session.query(Expense).one().category.value == "Clothing & Footwear"


def test_date_and_category_are_indexed(engine):
    indexed = {
        tuple(index["column_names"])
        for index in inspect(engine).get_indexes("expenses")
    }
    assert ("date",) in indexed
    assert ("category",) in indexed


def test_commit_failure_becomes_store_error(service, db_session, monkeypatch):
    def failing_commit():
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "commit", failing_commit)

    with pytest.raises(StoreError):
        service.create({"description": "x", "amount": 1, "category": "Transport", "date": "2024-06-01"})

    monkeypatch.undo()
    assert db_session.query(Expense).count() == 0
