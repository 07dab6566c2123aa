# models.py
# Role: SQLAlchemy ORM models for the expense tracker domain.
#       Defines the closed Category enumeration and the Expense model,
#       a single flat, dated, categorized spending entry.

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum,
    Integer,
    Numeric,
    String,
)

from db import Base


# Field limits shared by validation and the table constraints
DESCRIPTION_MAX_LENGTH = 200
MAX_AMOUNT = Decimal("999999.99")
MIN_DATE = date(2000, 1, 1)


class Category(str, enum.Enum):
    """
    The fixed set of expense categories, in display order.

    Values are the literal labels stored in the database and exchanged
    over the API.
    """

    GROCERIES = "Groceries"
    TRANSPORT = "Transport"
    HOUSING_AND_UTILITIES = "Housing and Utilities"
    RESTAURANTS_AND_CAFES = "Restaurants and Cafes"
    HEALTH_AND_MEDICINE = "Health and Medicine"
    CLOTHING_AND_FOOTWEAR = "Clothing & Footwear"
    ENTERTAINMENT = "Entertainment"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class Expense(Base):
    """
    ORM model representing a single expense.

    Rows are only written through ExpenseService (app/services/expenses.py),
    which validates every field first. The CHECK constraints below repeat the
    category and amount rules at the storage layer.
    """

    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_expenses_amount_non_negative"),
        CheckConstraint(f"amount <= {MAX_AMOUNT}", name="ck_expenses_amount_max"),
    )

    # Primary key
    id = Column(Integer, primary_key=True, index=True)

    # Free-text description, trimmed, 1-200 chars
    description = Column(String(DESCRIPTION_MAX_LENGTH), nullable=False)

    # Amount with cent precision
    amount = Column(Numeric(10, 2), nullable=False)

    # Stored as the literal label; non-native enum emits a CHECK constraint
    category = Column(
        Enum(
            Category,
            name="expense_category",
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
            length=32,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        index=True,
    )

    # Calendar date the money was spent
    date = Column(Date, nullable=False, index=True)

    # Set once on insert
    created_at = Column(DateTime, nullable=False)

    # Refreshed on every update
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<Expense id={self.id} date={self.date} amount={self.amount} category={self.category}>"
