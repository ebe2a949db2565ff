"""Budget category and variable expense models."""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, FrozenSet, Optional

from pydantic import Field

from models.base import (DatePeriod, LedgerRecord, RecordCreate,
                         RecordUpdate)


class BudgetCategory(LedgerRecord):
    """A spending envelope with a monthly budgeted amount."""

    name: str
    budgeted_amount: Decimal = Decimal("0")
    created_at: datetime


class BudgetCategoryCreate(RecordCreate):
    name: str = Field(..., min_length=1, max_length=100)
    budgeted_amount: Decimal = Field(Decimal("0"), ge=0)


class BudgetCategoryUpdate(RecordUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset({"name", "budgeted_amount"})

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    budgeted_amount: Optional[Decimal] = Field(None, ge=0)


class VariableExpense(LedgerRecord):
    """
    A month-to-month expense whose amount varies, e.g. groceries or fuel.

    The stored amount seeds every month of the budget forecast.
    """

    name: str
    category: str
    amount: Decimal
    created_at: datetime
    updated_at: Optional[datetime] = None


class VariableExpenseCreate(RecordCreate):
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=50)
    amount: Decimal = Field(..., ge=0)


class VariableExpenseUpdate(RecordUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset({"name", "category", "amount"})

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    amount: Optional[Decimal] = Field(None, ge=0)


class SpendingPeriod(DatePeriod):
    """Inclusive date range for budget-vs-actual spending."""
