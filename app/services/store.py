# app/services/store.py
#
# Record Store
# Thin driver over the expenses table: insert, get-by-id, delete-by-id,
# filtered/ordered scan and grouped totals. Commits happen here so every
# database failure surfaces as StoreError after a rollback.

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import StoreError
from app.services.queries import ExpenseFilters, apply_filters, build_expense_query
from models import Expense

logger = logging.getLogger(__name__)


def commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database error while trying to %s", action)
        raise StoreError(f"could not {action}") from exc


def insert_expense(db: Session, fields: Dict[str, Any], now: datetime) -> Expense:
    expense = Expense(created_at=now, updated_at=now, **fields)
    db.add(expense)
    commit(db, "insert expense")
    db.refresh(expense)
    return expense


def get_expense(db: Session, expense_id: int) -> Optional[Expense]:
    try:
        return db.query(Expense).filter(Expense.id == expense_id).first()
    except SQLAlchemyError as exc:
        logger.exception("Database error while loading expense %s", expense_id)
        raise StoreError("could not load expense") from exc


def save_expense(db: Session, expense: Expense) -> Expense:
    commit(db, f"update expense {expense.id}")
    db.refresh(expense)
    return expense


def delete_expense(db: Session, expense: Expense) -> None:
    db.delete(expense)
    commit(db, f"delete expense {expense.id}")


def scan_expenses(db: Session, filters: ExpenseFilters) -> List[Expense]:
    try:
        return build_expense_query(db, filters).all()
    except SQLAlchemyError as exc:
        logger.exception("Database error while listing expenses")
        raise StoreError("could not list expenses") from exc


def category_totals(db: Session, filters: ExpenseFilters) -> List[Tuple[Any, int, Any]]:
    """
    (category, count, total) per category for the filtered rows,
    biggest total first.
    """
    total = func.coalesce(func.sum(Expense.amount), 0)
    query = db.query(
        Expense.category,
        func.count(Expense.id),
        total,
    )
    query = (
        apply_filters(query, filters)
        .group_by(Expense.category)
        .order_by(total.desc(), Expense.category)
    )
    try:
        return query.all()
    except SQLAlchemyError as exc:
        logger.exception("Database error while summarizing expenses")
        raise StoreError("could not summarize expenses") from exc
