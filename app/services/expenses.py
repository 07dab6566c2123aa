# app/services/expenses.py
#
# Record Service
# The only component that writes to the expenses table. Every write passes
# through validate_and_normalize first; reads delegate to the query builder.

from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from app.errors import NotFoundError, ValidationError
from app.services import store
from app.services.clock import SystemClock
from app.services.queries import ExpenseFilters
from app.services.validation import CREATE, UPDATE, parse_iso_date, validate_and_normalize
from models import Category, Expense

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")


class ExpenseService:
    """
    CRUD and listing operations over expenses.

    Holds no state between calls besides the session and clock it was
    built with; app/deps.py builds one per request.
    """

    def __init__(self, db: Session, clock=None):
        self.db = db
        self.clock = clock or SystemClock()

    # ---- Writes ----

    def create(self, candidate: Mapping[str, Any]) -> Expense:
        try:
            fields = validate_and_normalize(candidate, CREATE, today=self.clock.today())
        except ValidationError as exc:
            logger.debug("Rejected new expense: %s", exc)
            raise

        expense = store.insert_expense(self.db, fields, now=self.clock.now())
        logger.info("Created expense %s (%s, %s)", expense.id, expense.date, expense.category.value)
        return expense

    def update(self, expense_id: int, candidate: Mapping[str, Any]) -> Expense:
        expense = self.get_by_id(expense_id)

        try:
            changes = validate_and_normalize(candidate, UPDATE, today=self.clock.today())
        except ValidationError as exc:
            logger.debug("Rejected update of expense %s: %s", expense_id, exc)
            raise

        for field, value in changes.items():
            setattr(expense, field, value)

        now = self.clock.now()
        if expense.updated_at is not None and now <= expense.updated_at:
            now = expense.updated_at + timedelta(microseconds=1)
        expense.updated_at = now

        expense = store.save_expense(self.db, expense)
        logger.info("Updated expense %s (fields: %s)", expense_id, ", ".join(changes) or "none")
        return expense

    def delete(self, expense_id: int) -> None:
        expense = self.get_by_id(expense_id)
        store.delete_expense(self.db, expense)
        logger.info("Deleted expense %s", expense_id)

    # ---- Reads ----

    def get_by_id(self, expense_id: int) -> Expense:
        expense = store.get_expense(self.db, expense_id)
        if expense is None:
            raise NotFoundError(expense_id)
        return expense

    def list(self, filters: ExpenseFilters | None = None) -> List[Expense]:
        return store.scan_expenses(self.db, filters or ExpenseFilters())

    def list_daily(self, day: date | str) -> List[Expense]:
        return self.list(ExpenseFilters(day=parse_iso_date(day)))

    def list_monthly(self, year: int, month: int) -> List[Expense]:
        return self.list(ExpenseFilters.from_params(year=year, month=month))

    def summarize(self, filters: ExpenseFilters | None = None) -> Dict[str, Any]:
        """
        Totals for the filtered expenses:
            {"count": int, "total": Decimal, "by_category": [{"category", "count", "total"}, ...]}
        """
        rows = store.category_totals(self.db, filters or ExpenseFilters())

        by_category = []
        for category, count, total in rows:
            by_category.append(
                {
                    "category": Category(category).value,
                    "count": int(count),
                    "total": Decimal(str(total)).quantize(_CENT),
                }
            )

        return {
            "count": sum(item["count"] for item in by_category),
            "total": sum((item["total"] for item in by_category), Decimal("0.00")),
            "by_category": by_category,
        }

    @staticmethod
    def list_categories() -> List[str]:
        return Category.values()
