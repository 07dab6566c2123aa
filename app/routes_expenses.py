# app/routes_expenses.py
"""
JSON API for expenses: CRUD, daily / monthly / filtered listings,
per-category summary, CSV import, and the category list.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, File, HTTPException, Query, Response, UploadFile

from app.deps import get_expense_service
from app.schemas import ExpenseRead, ExpenseSummary, ImportReport
from app.services.csv_import import import_expenses_csv
from app.services.expenses import ExpenseService
from app.services.queries import ExpenseFilters

router = APIRouter(prefix="/api")


def expense_filters(
    category: str | None = Query(None),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    day: str | None = Query(None, alias="date"),
    year: str | None = Query(None),
    month: str | None = Query(None),
) -> ExpenseFilters:
    """Query-string filters shared by the list and summary endpoints."""
    return ExpenseFilters.from_params(
        category=category,
        start_date=start_date,
        end_date=end_date,
        day=day,
        year=year,
        month=month,
    )


# -------------------------------------------------------------------
# Listings
# -------------------------------------------------------------------

@router.get("/expenses", response_model=List[ExpenseRead])
def list_expenses(
    filters: ExpenseFilters = Depends(expense_filters),
    service: ExpenseService = Depends(get_expense_service),
):
    """
    All expenses matching the filters, most recent first.
    With no filters every expense is returned.
    """
    return service.list(filters)


@router.get("/expenses/daily/{day}", response_model=List[ExpenseRead])
def list_daily(day: str, service: ExpenseService = Depends(get_expense_service)):
    return service.list_daily(day)


@router.get("/expenses/monthly/{year}/{month}", response_model=List[ExpenseRead])
def list_monthly(year: int, month: int, service: ExpenseService = Depends(get_expense_service)):
    return service.list_monthly(year, month)


@router.get("/expenses/summary", response_model=ExpenseSummary)
def summary(
    filters: ExpenseFilters = Depends(expense_filters),
    service: ExpenseService = Depends(get_expense_service),
):
    """Count and total per category for the same filters as /api/expenses."""
    return service.summarize(filters)


# -------------------------------------------------------------------
# CSV import
# -------------------------------------------------------------------

@router.post("/expenses/import", response_model=ImportReport)
def import_csv(
    csv_file: UploadFile = File(...),
    service: ExpenseService = Depends(get_expense_service),
):
    """
    Create one expense per CSV row. Rows failing validation are skipped
    and listed in the response with their 1-based row number.
    """
    try:
        result = import_expenses_csv(service, csv_file.file)
    except ValueError as exc:
        # missing columns, unreadable or oversized file
        raise HTTPException(status_code=400, detail=str(exc))
    return ImportReport(imported=result.imported, errors=result.errors, stopped=result.stopped)


# -------------------------------------------------------------------
# Single expense CRUD
# -------------------------------------------------------------------

@router.post("/expenses", response_model=ExpenseRead, status_code=201)
def create_expense(
    payload: Dict[str, Any] = Body(...),
    service: ExpenseService = Depends(get_expense_service),
):
    return service.create(payload)


@router.get("/expenses/{expense_id}", response_model=ExpenseRead)
def get_expense(expense_id: int, service: ExpenseService = Depends(get_expense_service)):
    return service.get_by_id(expense_id)


@router.put("/expenses/{expense_id}", response_model=ExpenseRead)
@router.patch("/expenses/{expense_id}", response_model=ExpenseRead)
def update_expense(
    expense_id: int,
    payload: Dict[str, Any] = Body(...),
    service: ExpenseService = Depends(get_expense_service),
):
    """Only the fields present in the body change; the rest keep their values."""
    return service.update(expense_id, payload)


@router.delete("/expenses/{expense_id}", status_code=204)
def delete_expense(expense_id: int, service: ExpenseService = Depends(get_expense_service)):
    service.delete(expense_id)
    return Response(status_code=204)


# -------------------------------------------------------------------
# Categories
# -------------------------------------------------------------------

@router.get("/categories", response_model=List[str])
def list_categories():
    return ExpenseService.list_categories()
