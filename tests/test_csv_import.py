import io

import pytest
from sqlalchemy.exc import OperationalError

from app.services.csv_import import import_expenses_csv
from models import Expense

GOOD_CSV = """Date, Description ,AMOUNT,Category
2024-06-01,Bread,2.50,Groceries
2024-06-02,Metro card,30,Transport
,,,
2024-06-03,Cinema,-4,Entertainment
2024-06-20,Future thing,1,Groceries
2024-06-04,,5,Groceries
2024-06-05,Pharmacy,12.345,Health and Medicine
"""


def test_import_stores_valid_rows_and_reports_the_rest(service, db_session):
    result = import_expenses_csv(service, io.StringIO(GOOD_CSV))

    assert result.imported == 3
    assert result.errors == [
        {"row": 4, "error": "amount invalid"},
        {"row": 5, "error": "date in future"},
        {"row": 6, "error": "description required"},
    ]
    descriptions = sorted(e.description for e in db_session.query(Expense).all())
    assert descriptions == ["Bread", "Metro card", "Pharmacy"]


def test_import_requires_columns(service):
    with pytest.raises(ValueError, match="category"):
        import_expenses_csv(service, io.StringIO("date,description,amount\n2024-06-01,Bread,1\n"))


def test_import_endpoint(client):
    response = client.post(
        "/api/expenses/import",
        files={"csv_file": ("expenses.csv", GOOD_CSV.encode(), "text/csv")},
    )
    assert response.status_code == 200
    assert response.json()["imported"] == 3
    assert len(response.json()["errors"]) == 3
    assert response.json()["stopped"] is False
    assert len(client.get("/api/expenses").json()) == 3


def test_import_endpoint_rejects_wrong_columns(client):
    response = client.post(
        "/api/expenses/import",
        files={"csv_file": ("expenses.csv", b"foo,bar\n1,2\n", "text/csv")},
    )
    assert response.status_code == 400
    assert "missing required columns" in response.json()["error"]


def test_database_failure_stops_import_and_reports_row(service, db_session, monkeypatch):
    real_commit = db_session.commit
    calls = {"n": 0}

    def commit_fails_on_second_call():
        calls["n"] += 1
        if calls["n"] == 2:
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))
        real_commit()

    monkeypatch.setattr(db_session, "commit", commit_fails_on_second_call)
    csv_text = (
        "date,description,amount,category\n"
        "2024-06-01,Bread,2.50,Groceries\n"
        "2024-06-02,Metro card,30,Transport\n"
        "2024-06-03,Cinema,12,Entertainment\n"
    )

    result = import_expenses_csv(service, io.StringIO(csv_text))

    assert result.imported == 1
    assert result.stopped is True
    assert result.errors == [{"row": 2, "error": "not stored: database error, import stopped"}]
    monkeypatch.undo()
    assert [e.description for e in db_session.query(Expense).all()] == ["Bread"]
