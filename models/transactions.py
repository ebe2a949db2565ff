"""Transaction models."""

import datetime as dt
from decimal import Decimal
from typing import ClassVar, FrozenSet, Literal, Optional

import pydantic
from pydantic import Field

from models.base import LedgerModel, LedgerRecord, RecordCreate, RecordUpdate

TransactionType = Literal["income", "expense", "transfer"]
TransactionDetailedType = Literal[
    "income",
    "variable-expense",
    "fixed-expense",
    "subscription",
    "debt-payment",
    "goal-contribution",
]


def _date_only(v):
    if isinstance(v, str) and "T" in v:
        return v.split("T", 1)[0]
    if isinstance(v, dt.datetime):
        return v.date()
    return v


def _infer_type(data):
    # Entries written without a type are classified by the sign of the amount
    if isinstance(data, dict) and not data.get("type") and "amount" in data:
        try:
            negative = Decimal(str(data["amount"])) < 0
        except ArithmeticError:
            return data
        data = {**data, "type": "expense" if negative else "income"}
    return data


class Transaction(LedgerRecord):
    """A single ledger entry. Positive amounts are income, negative are spending."""

    date: dt.date
    description: str
    amount: Decimal
    type: TransactionType
    detailed_type: Optional[TransactionDetailedType] = None
    category_id: Optional[str] = None
    account_id: Optional[str] = None
    to_account_id: Optional[str] = None
    source: Optional[str] = None
    notes: Optional[str] = None
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None

    date_only = pydantic.field_validator("date", mode="before")(_date_only)
    @pydantic.model_validator(mode="before")
    @classmethod
    def infer_type(cls, data):
        return _infer_type(data)


class TransactionCreate(RecordCreate):
    date: dt.date
    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal
    type: TransactionType
    detailed_type: Optional[TransactionDetailedType] = None
    category_id: Optional[str] = None
    account_id: Optional[str] = None
    to_account_id: Optional[str] = None
    source: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=1000)

    @pydantic.model_validator(mode="before")
    @classmethod
    def infer_type(cls, data):
        return _infer_type(data)

    @pydantic.model_validator(mode="after")
    def transfers_name_a_destination(self):
        if self.type == "transfer" and not self.to_account_id:
            raise ValueError("Transfers need a toAccountId")
        return self


class TransactionUpdate(RecordUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset(
        {"date", "description", "amount", "type"}
    )

    date: Optional[dt.date] = None
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[Decimal] = None
    type: Optional[TransactionType] = None
    detailed_type: Optional[TransactionDetailedType] = None
    category_id: Optional[str] = None
    account_id: Optional[str] = None
    to_account_id: Optional[str] = None
    source: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=1000)


class TransactionQuery(LedgerModel):
    """Filters accepted by the transaction list."""

    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    category_id: Optional[str] = None
    account_id: Optional[str] = None
    type: Optional[TransactionType] = None
    limit: Optional[int] = Field(None, ge=1, le=1000)
    offset: Optional[int] = Field(None, ge=0)
