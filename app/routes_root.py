# routes_root.py
"""
Root / basic endpoints (page, health).
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.deps import templates
from app.services.expenses import ExpenseService
from models import MAX_AMOUNT, MIN_DATE

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def index_page(request: Request):
    """
    Single-page UI. The table, filters and forms are driven by
    static/js/app.js through the /api endpoints.
    """
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "categories": ExpenseService.list_categories(),
            "max_amount": str(MAX_AMOUNT),
            "min_date": MIN_DATE.isoformat(),
        },
    )


@router.get("/health")
def health():
    """Simple health check."""
    return {"status": "ok"}
