# tests/conftest.py
# Shared fixtures: in-memory database per test, a controllable clock,
# the service under test and a TestClient wired to both.

import os

# Must be set before config/db are imported by the app modules
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from db import Base, make_engine
import models  # noqa: F401
from app.deps import get_clock, get_db
from app.services.expenses import ExpenseService
from main import app


class FakeClock:
    """
    Clock pinned to a given moment. Every now() call advances one second
    so consecutive writes get distinct timestamps.
    """

    def __init__(self, start: datetime = datetime(2024, 6, 15, 9, 0, 0)):
        self.current = start

    def now(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current

    def today(self) -> date:
        return self.current.date()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def service(db_session, clock):
    return ExpenseService(db_session, clock)


@pytest.fixture
def client(db_session, clock):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_expense(service):
    """Create an expense with sensible defaults for any field not given."""

    def _make(**overrides):
        candidate = {
            "description": "Weekly shop",
            "amount": "42.50",
            "category": "Groceries",
            "date": "2024-06-01",
        }
        candidate.update(overrides)
        return service.create(candidate)

    return _make
