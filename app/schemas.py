# app/schemas.py
# Role: Pydantic response models for the JSON API.
#       Request bodies stay plain dicts so validation messages come from
#       app/services/validation.py rather than from pydantic.

import datetime as dt
from typing import List

from pydantic import BaseModel, ConfigDict

from models import Category


class ExpenseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    amount: float
    category: Category
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime


class CategoryTotal(BaseModel):
    category: Category
    count: int
    total: float


class ExpenseSummary(BaseModel):
    count: int
    total: float
    by_category: List[CategoryTotal]


class ImportRowError(BaseModel):
    row: int
    error: str


class ImportReport(BaseModel):
    imported: int
    errors: List[ImportRowError]
    stopped: bool = False
