# app/deps.py
# Role: Shared application-level dependencies.
#       Provides the Jinja2 templates loader, the standard SQLAlchemy database
#       session dependency, the clock, and the per-request ExpenseService.

"""
Shared dependencies for the expense tracker app.
"""

from typing import Generator

from fastapi import Depends
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from app.services.clock import SystemClock
from app.services.expenses import ExpenseService
from config import TEMPLATES_DIR
from db import SessionLocal

# -------------------------------------------------------------------
# Templates
# -------------------------------------------------------------------

# Jinja2 templates loader (used by the page route)
templates = Jinja2Templates(directory=TEMPLATES_DIR)

# -------------------------------------------------------------------
# Database dependency
# -------------------------------------------------------------------

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session and ensures it is closed.

    Typical usage in routes:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# -------------------------------------------------------------------
# Clock & service
# -------------------------------------------------------------------

_system_clock = SystemClock()


def get_clock() -> SystemClock:
    """Overridden in tests to pin "today"."""
    return _system_clock


def get_expense_service(
    db: Session = Depends(get_db),
    clock=Depends(get_clock),
) -> ExpenseService:
    return ExpenseService(db, clock)
