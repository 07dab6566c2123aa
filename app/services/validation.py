# app/services/validation.py
#
# Validation & Normalization
# Pure checks over a candidate expense (full for create, partial for update).
# Every accepted value comes back normalized: trimmed description, Decimal
# amount with cents, Category member, datetime.date.

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable, Dict, Mapping

from app.errors import ValidationError
from models import DESCRIPTION_MAX_LENGTH, MAX_AMOUNT, MIN_DATE, Category

CREATE = "create"
UPDATE = "update"

# Editable fields, in the order they are checked
FIELDS = ("description", "amount", "category", "date")

_CENT = Decimal("0.01")
_AMOUNT_CEILING = Decimal("1000000")
_ISO_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
# plain ASCII decimal, optional sign and exponent; no underscores or other digit sets
_AMOUNT_RE = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?$")


# ---- Single-value parsers ----

def parse_iso_date(value: Any, field: str = "date") -> date:
    """
    Parse a strict YYYY-MM-DD string (or pass a date through).

    Raises ValidationError("<field> format invalid") for anything else,
    including impossible dates like 2023-02-29.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise ValidationError(field, "format invalid")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(field, "format invalid") from None


def parse_category(value: Any, field: str = "category") -> Category:
    if isinstance(value, Category):
        return value
    if not isinstance(value, str):
        raise ValidationError(field, "invalid")
    try:
        return Category(value)
    except ValueError:
        raise ValidationError(field, "invalid") from None


def _to_decimal(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        # str() keeps the shortest repr, so 999999.99 stays 999999.99
        return Decimal(str(value))
    if isinstance(value, str) and _AMOUNT_RE.match(value.strip()):
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            return None
    return None


# ---- Field normalizers ----

def _normalize_description(value: Any, today: date) -> str:
    if not isinstance(value, str):
        raise ValidationError("description", "required")
    text = value.strip()
    if not text:
        raise ValidationError("description", "required")
    if len(text) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError("description", "too long")
    return text


def _normalize_amount(value: Any, today: date) -> Decimal:
    amount = _to_decimal(value)
    if amount is None or not amount.is_finite() or amount < 0:
        raise ValidationError("amount", "invalid")
    if amount >= _AMOUNT_CEILING:
        raise ValidationError("amount", "too large")

    amount = amount.quantize(_CENT, rounding=ROUND_HALF_UP)
    if amount > MAX_AMOUNT:
        raise ValidationError("amount", "too large")
    # drop the sign of -0.00
    return abs(amount)


def _normalize_category(value: Any, today: date) -> Category:
    return parse_category(value)


def _normalize_date(value: Any, today: date) -> date:
    parsed = parse_iso_date(value)
    if parsed > today:
        raise ValidationError("date", "in future")
    if parsed < MIN_DATE:
        raise ValidationError("date", "too old")
    return parsed


_NORMALIZERS: Dict[str, Callable[[Any, date], Any]] = {
    "description": _normalize_description,
    "amount": _normalize_amount,
    "category": _normalize_category,
    "date": _normalize_date,
}


# ---- Public API ----

def validate_and_normalize(
    candidate: Mapping[str, Any],
    mode: str = CREATE,
    today: date | None = None,
) -> Dict[str, Any]:
    """
    Validate a candidate expense and return its normalized fields.

    mode="create": description, amount, category and date are all required.
    mode="update": only the fields present are checked and returned; the
    caller merges them over the existing record. A field sent as null is
    treated as missing and rejected with "<field> required".

    `today` is the server's current date (see Clock); dates after it are
    rejected. Keys other than the four editable fields are ignored.
    """
    if mode not in (CREATE, UPDATE):
        raise ValueError(f"unknown validation mode: {mode!r}")
    if not isinstance(candidate, Mapping):
        raise ValidationError("body", "invalid")

    today = today or date.today()
    cleaned: Dict[str, Any] = {}

    for field in FIELDS:
        value = candidate.get(field)
        if value is None:
            if mode == CREATE or field in candidate:
                raise ValidationError(field, "required")
            continue
        cleaned[field] = _NORMALIZERS[field](value, today)

    return cleaned
