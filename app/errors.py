# app/errors.py
# Role: Error taxonomy of the expense tracker and its translation into
#       JSON responses at the HTTP boundary.

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ExpenseError(Exception):
    """Base class for errors raised by the expense service."""


class ValidationError(ExpenseError):
    """
    Caller-supplied data broke a field rule.

    The message always reads "<field> <rule>", e.g. "amount too large".
    """

    def __init__(self, field: str, rule: str):
        self.field = field
        self.rule = rule
        super().__init__(f"{field} {rule}")

    @property
    def message(self) -> str:
        return f"{self.field} {self.rule}"


class NotFoundError(ExpenseError):
    """No expense exists with the requested id."""

    def __init__(self, expense_id: int):
        self.expense_id = expense_id
        super().__init__(f"Expense {expense_id} not found")


class StoreError(ExpenseError):
    """The database rejected or failed a write."""


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse({"error": exc.message, "field": exc.field}, status_code=400)

    @app.exception_handler(NotFoundError)
    async def not_found_error(request: Request, exc: NotFoundError):
        return JSONResponse({"error": "Expense not found"}, status_code=404)

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError):
        return JSONResponse({"error": "server_error"}, status_code=500)

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse({"error": "bad_request"}, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse({"error": "not_found"}, status_code=404)
        if exc.status_code == 405:
            return JSONResponse({"error": "method_not_allowed"}, status_code=405)
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)
