# app/services/queries.py
#
# Query Builder
# Turns filter criteria (category, date range, single day, single month)
# into a deterministic SQLAlchemy query over the expenses table.

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Tuple

from sqlalchemy.orm import Query, Session

from app.errors import ValidationError
from app.services.validation import parse_category, parse_iso_date
from models import Category, Expense


# ---- Date Range Utilities ----

def month_range(year: int, month: int) -> Tuple[date, date]:
    """
    Returns (first_day, last_day) of the given month, both inclusive.
    The last day comes from the calendar, so February follows leap years.
    """
    if not (1 <= month <= 12):
        raise ValidationError("month", "invalid")
    if not (date.min.year <= year <= date.max.year):
        raise ValidationError("year", "invalid")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def year_range(year: int) -> Tuple[date, date]:
    if not (date.min.year <= year <= date.max.year):
        raise ValidationError("year", "invalid")
    return date(year, 1, 1), date(year, 12, 31)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def _parse_int(value: Any, field: str) -> int | None:
    value = _blank_to_none(value)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(field, "invalid")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"[+-]?[0-9]+", value.strip()):
        return int(value.strip())
    raise ValidationError(field, "invalid")


# ---- Filters ----

@dataclass(frozen=True)
class ExpenseFilters:
    """
    Filter request for listing expenses. All fields are optional and
    every present field narrows the result (they are ANDed together).
    """

    category: Category | None = None
    start_date: date | None = None
    end_date: date | None = None
    day: date | None = None
    year: int | None = None
    month: int | None = None

    @classmethod
    def from_params(
        cls,
        category: Any = None,
        start_date: Any = None,
        end_date: Any = None,
        day: Any = None,
        year: Any = None,
        month: Any = None,
    ) -> "ExpenseFilters":
        """
        Build filters from raw request values. Blank strings count as
        absent, so an empty "All categories" select does not filter.
        """
        category = _blank_to_none(category)
        start_date = _blank_to_none(start_date)
        end_date = _blank_to_none(end_date)
        day = _blank_to_none(day)
        year = _parse_int(year, "year")
        month = _parse_int(month, "month")

        if month is not None and year is None:
            raise ValidationError("year", "required")

        filters = cls(
            category=parse_category(category) if category is not None else None,
            start_date=parse_iso_date(start_date, "startDate") if start_date is not None else None,
            end_date=parse_iso_date(end_date, "endDate") if end_date is not None else None,
            day=parse_iso_date(day, "date") if day is not None else None,
            year=year,
            month=month,
        )
        # Fail early on impossible months / years
        filters.period()
        return filters

    def period(self) -> Tuple[date, date] | None:
        """Inclusive (first, last) day selected by year/month, if any."""
        if self.year is None:
            return None
        if self.month is None:
            return year_range(self.year)
        return month_range(self.year, self.month)

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.category, self.start_date, self.end_date, self.day, self.year, self.month)
        )


# ---- Query construction ----

def apply_filters(query: Query, filters: ExpenseFilters) -> Query:
    if filters.category is not None:
        query = query.filter(Expense.category == filters.category)

    if filters.day is not None:
        query = query.filter(Expense.date == filters.day)

    period = filters.period()
    if period is not None:
        first_day, last_day = period
        query = query.filter(Expense.date >= first_day, Expense.date <= last_day)

    if filters.start_date is not None:
        query = query.filter(Expense.date >= filters.start_date)

    if filters.end_date is not None:
        query = query.filter(Expense.date <= filters.end_date)

    return query


def build_expense_query(db: Session, filters: ExpenseFilters | None = None) -> Query:
    """
    Query for expenses matching `filters`, most recent first.
    Same-date rows fall back to id descending so newer inserts come first.
    """
    query = apply_filters(db.query(Expense), filters or ExpenseFilters())
    return query.order_by(Expense.date.desc(), Expense.id.desc())
