"""Financial goal models."""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, FrozenSet, Literal, Optional

import pydantic
from pydantic import Field

from models.base import LedgerModel, LedgerRecord, RecordCreate, RecordUpdate

GoalIcon = Literal[
    "default",
    "home",
    "car",
    "plane",
    "briefcase",
    "graduation-cap",
    "gift",
    "piggy-bank",
    "trending-up",
    "shield-check",
]


class FinancialGoal(LedgerRecord):
    """A savings target to reach by ``target_date``."""

    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")
    target_date: date
    icon: GoalIcon = "default"
    created_at: datetime
    updated_at: Optional[datetime] = None

    @pydantic.field_validator("target_date", mode="before")
    @classmethod
    def timestamp_to_date(cls, v):
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        if isinstance(v, datetime):
            return v.date()
        return v

    @pydantic.field_validator("icon", mode="before")
    @classmethod
    def null_icon(cls, v):
        return v or "default"

    @property
    def amount_needed(self) -> Decimal:
        return max(self.target_amount - self.current_amount, Decimal("0"))


class FinancialGoalCreate(RecordCreate):
    name: str = Field(..., min_length=1, max_length=100)
    target_amount: Decimal = Field(..., gt=0)
    current_amount: Decimal = Field(Decimal("0"), ge=0)
    target_date: date
    icon: GoalIcon = "default"


class FinancialGoalUpdate(RecordUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset(
        {"name", "target_amount", "current_amount", "target_date", "icon"}
    )

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    target_amount: Optional[Decimal] = Field(None, gt=0)
    current_amount: Optional[Decimal] = Field(None, ge=0)
    target_date: Optional[date] = None
    icon: Optional[GoalIcon] = None


class GoalContributionCreate(LedgerModel):
    """Money put towards a goal; recorded as an outgoing transaction."""

    amount: Decimal = Field(..., gt=0)
    description: Optional[str] = Field(None, max_length=255)
    from_account_id: Optional[str] = None
