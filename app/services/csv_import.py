# app/services/csv_import.py
"""
Bulk import of expenses from a CSV file.

The file must have the columns date, description, amount and category
(any case, surrounding spaces ignored). Each row is created through
ExpenseService, so it gets exactly the same validation as the API.
Invalid rows are skipped and reported; valid rows are stored.
A database failure ends the import at that row: rows before it stay
stored, the failed row is reported and the result is marked as stopped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import IO, Any, Dict, List, Union

import pandas as pd

from app.errors import StoreError, ValidationError
from app.services.expenses import ExpenseService
from config import MAX_UPLOAD_ROWS

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "description", "amount", "category")


@dataclass
class ImportResult:
    imported: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)
    # set when a database failure ended the import early
    stopped: bool = False


def _none_if_nan(x):
    if pd.isna(x):
        return None
    return x


def read_expenses_csv(source: Union[str, IO]) -> pd.DataFrame:
    """
    Load the CSV as strings and normalize headers.
    Raises ValueError when required columns are missing or the file is too big.
    """
    df = pd.read_csv(source, dtype=str, keep_default_na=False, na_values=[""])

    # normalize headers
    df.columns = df.columns.str.strip().str.lower()

    missing = set(REQUIRED_COLUMNS) - set(df.columns)
    if missing:
        raise ValueError(f"missing required columns: {sorted(missing)}")

    # drop fully empty rows
    df = df[list(REQUIRED_COLUMNS)].dropna(how="all").copy()

    if len(df) > MAX_UPLOAD_ROWS:
        raise ValueError(f"too many rows: {len(df)} (max {MAX_UPLOAD_ROWS})")

    return df


def import_expenses_csv(service: ExpenseService, source: Union[str, IO]) -> ImportResult:
    df = read_expenses_csv(source)
    result = ImportResult()

    # row numbers are 1-based data rows of the file (header excluded)
    for row in df.itertuples(index=True):
        row_number = int(row.Index) + 1
        candidate = {column: _none_if_nan(getattr(row, column)) for column in REQUIRED_COLUMNS}
        try:
            service.create(candidate)
        except ValidationError as exc:
            result.errors.append({"row": row_number, "error": exc.message})
            continue
        except StoreError:
            # earlier rows are already committed; report where the import stopped
            result.errors.append({"row": row_number, "error": "not stored: database error, import stopped"})
            result.stopped = True
            break
        result.imported += 1

    logger.info("CSV import: %d stored, %d rejected", result.imported, len(result.errors))
    return result
