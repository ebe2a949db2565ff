"""Recurring income, subscription, and fixed expense models."""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, FrozenSet, Literal, Optional

import pydantic
from pydantic import Field

from models.base import (DatePeriod, LedgerRecord, RecordCreate, RecordUpdate,
                         optional_str)

RecurringItemType = Literal["income", "subscription", "fixed-expense"]
RecurringFrequency = Literal[
    "daily", "weekly", "bi-weekly", "semi-monthly", "monthly", "quarterly", "yearly"
]


class RecurringItem(LedgerRecord):
    """
    Something that repeats on a schedule.

    Subscriptions are anchored on ``last_renewal_date`` and first recur one
    period after it; income and fixed expenses are anchored on ``start_date``.
    Semi-monthly items pay on the days of month of their two pay dates.
    Amounts are always positive; ``type`` decides inflow vs outflow.
    """

    name: str
    type: RecurringItemType
    amount: Decimal
    frequency: RecurringFrequency
    start_date: Optional[date] = None
    last_renewal_date: Optional[date] = None
    semi_monthly_first_pay_date: Optional[date] = None
    semi_monthly_second_pay_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    category_id: Optional[str] = None
    created_at: datetime

    @pydantic.field_validator(
        "start_date",
        "last_renewal_date",
        "semi_monthly_first_pay_date",
        "semi_monthly_second_pay_date",
        "end_date",
        mode="before",
    )
    @classmethod
    def timestamp_to_date(cls, v):
        # timestamptz columns come back as full ISO timestamps
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        if isinstance(v, datetime):
            return v.date()
        return v


class RecurringItemCreate(RecordCreate):
    name: str = Field(..., min_length=1, max_length=100)
    type: RecurringItemType
    amount: Decimal = Field(..., gt=0)
    frequency: RecurringFrequency
    start_date: Optional[date] = None
    last_renewal_date: Optional[date] = None
    semi_monthly_first_pay_date: Optional[date] = None
    semi_monthly_second_pay_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=500)
    category_id: Optional[str] = None

    blank_to_none = pydantic.field_validator("notes", "category_id", mode="before")(
        optional_str
    )

    @pydantic.model_validator(mode="after")
    def check_schedule_anchor(self):
        if self.frequency == "semi-monthly":
            if not (
                self.semi_monthly_first_pay_date and self.semi_monthly_second_pay_date
            ):
                raise ValueError("Semi-monthly items need both pay dates")
        elif self.type == "subscription":
            if not self.last_renewal_date:
                raise ValueError("Subscriptions need a last renewal date")
        elif not self.start_date:
            raise ValueError("Recurring items need a start date")
        return self


class RecurringItemUpdate(RecordUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset(
        {"name", "type", "amount", "frequency"}
    )

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[RecurringItemType] = None
    amount: Optional[Decimal] = Field(None, gt=0)
    frequency: Optional[RecurringFrequency] = None
    start_date: Optional[date] = None
    last_renewal_date: Optional[date] = None
    semi_monthly_first_pay_date: Optional[date] = None
    semi_monthly_second_pay_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=500)
    category_id: Optional[str] = None


class GenerationPeriod(DatePeriod):
    """Date range to materialize recurring items into transactions for."""
