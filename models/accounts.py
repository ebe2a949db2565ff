"""Bank account models."""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, FrozenSet, Literal, Optional

import pydantic
from pydantic import Field

from models.base import LedgerRecord, RecordCreate, RecordUpdate, optional_str

AccountType = Literal["checking", "savings", "credit card", "other"]


class Account(LedgerRecord):
    """A user's bank or card account."""

    name: str
    type: AccountType
    bank_name: Optional[str] = None
    last4: Optional[str] = None
    balance: Decimal = Decimal("0")
    is_primary: bool = False
    created_at: datetime


class AccountCreate(RecordCreate):
    """Model for creating accounts - excludes auto-generated fields."""

    name: str = Field(..., min_length=1, max_length=100)
    type: AccountType
    bank_name: Optional[str] = Field(None, max_length=100)
    last4: Optional[str] = Field(None, pattern=r"^\d{4}$")
    balance: Decimal = Decimal("0")
    is_primary: bool = False

    blank_to_none = pydantic.field_validator("bank_name", "last4", mode="before")(
        optional_str
    )


class AccountUpdate(RecordUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset(
        {"name", "type", "balance", "is_primary"}
    )

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[AccountType] = None
    bank_name: Optional[str] = Field(None, max_length=100)
    last4: Optional[str] = Field(None, pattern=r"^\d{4}$")
    balance: Optional[Decimal] = None
    is_primary: Optional[bool] = None

    blank_to_none = pydantic.field_validator("bank_name", "last4", mode="before")(
        optional_str
    )
