"""Debt account and payoff plan models."""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, FrozenSet, List, Literal, Optional

from pydantic import Field

from models.base import LedgerModel, LedgerRecord, RecordCreate, RecordUpdate

DebtAccountType = Literal[
    "credit-card", "student-loan", "personal-loan", "mortgage", "auto-loan", "other"
]
PaymentFrequency = Literal["monthly", "bi-weekly", "weekly", "annually", "other"]
DebtPayoffStrategy = Literal["snowball", "avalanche"]


class DebtAccount(LedgerRecord):
    """A debt with a fixed minimum payment due on a day of the month."""

    name: str
    type: DebtAccountType
    balance: Decimal = Decimal("0")
    apr: Decimal = Field(..., description="Annual percentage rate, 19.9 for 19.9%")
    minimum_payment: Decimal
    payment_day_of_month: int = Field(..., ge=1, le=31)
    payment_frequency: PaymentFrequency = "monthly"
    created_at: datetime


class DebtAccountCreate(RecordCreate):
    """Model for creating debts - excludes auto-generated fields."""

    name: str = Field(..., min_length=1, max_length=100)
    type: DebtAccountType
    balance: Decimal = Field(Decimal("0"), ge=0)
    apr: Decimal = Field(..., ge=0, le=100)
    minimum_payment: Decimal = Field(..., ge=0)
    payment_day_of_month: int = Field(..., ge=1, le=31)
    payment_frequency: PaymentFrequency = "monthly"


class DebtAccountUpdate(RecordUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset(
        {
            "name",
            "type",
            "balance",
            "apr",
            "minimum_payment",
            "payment_day_of_month",
            "payment_frequency",
        }
    )

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[DebtAccountType] = None
    balance: Optional[Decimal] = Field(None, ge=0)
    apr: Optional[Decimal] = Field(None, ge=0, le=100)
    minimum_payment: Optional[Decimal] = Field(None, ge=0)
    payment_day_of_month: Optional[int] = Field(None, ge=1, le=31)
    payment_frequency: Optional[PaymentFrequency] = None


class DebtPaymentCreate(LedgerModel):
    """A one-off payment made against a debt."""

    amount: Decimal = Field(..., gt=0)
    from_account_id: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=500)


class DebtStrategyUpdate(LedgerModel):
    strategy: DebtPayoffStrategy


class DebtPlan(LedgerModel):
    """
    A user's debts together with the chosen payoff strategy.

    ``debt_accounts`` is kept in the order extra payments should go to them.
    """

    debt_accounts: List[DebtAccount] = Field(default_factory=list)
    strategy: Optional[DebtPayoffStrategy] = None
    user_id: str

    @property
    def total_balance(self) -> Decimal:
        return sum((debt.balance for debt in self.debt_accounts), Decimal("0"))

    @property
    def total_minimum_payment(self) -> Decimal:
        return sum((debt.minimum_payment for debt in self.debt_accounts), Decimal("0"))

    def summary(self) -> dict:
        return {
            "strategy": self.strategy,
            "totalDebts": len(self.debt_accounts),
            "totalBalance": self.total_balance,
            "totalMinimumPayment": self.total_minimum_payment,
            "debtAccounts": [debt.to_api() for debt in self.debt_accounts],
        }
