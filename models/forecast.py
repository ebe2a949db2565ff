"""Budget forecast result models."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from models.base import LedgerModel
from models.debts import DebtAccountType


class ForecastLineItem(LedgerModel):
    """A recurring item's total within one forecast month."""

    id: str
    name: str
    total_amount_in_month: Decimal
    category_id: Optional[str] = None


class DebtPaymentLineItem(LedgerModel):
    id: str
    name: str
    total_amount_in_month: Decimal
    debt_type: DebtAccountType
    additional_payment: Decimal = Decimal("0")


class VariableExpenseLineItem(LedgerModel):
    id: str
    name: str
    month_specific_amount: Decimal


class GoalContributionLineItem(LedgerModel):
    id: str
    name: str
    month_specific_contribution: Decimal


class MonthlyForecast(LedgerModel):
    """Projected inflows and outflows for one calendar month."""

    month: date
    month_label: str
    income_items: List[ForecastLineItem] = Field(default_factory=list)
    fixed_expense_items: List[ForecastLineItem] = Field(default_factory=list)
    subscription_items: List[ForecastLineItem] = Field(default_factory=list)
    debt_payment_items: List[DebtPaymentLineItem] = Field(default_factory=list)
    variable_expenses: List[VariableExpenseLineItem] = Field(default_factory=list)
    goal_contributions: List[GoalContributionLineItem] = Field(default_factory=list)
    total_income: Decimal = Decimal("0")
    total_fixed_expenses: Decimal = Decimal("0")
    total_subscriptions: Decimal = Decimal("0")
    total_debt_minimum_payments: Decimal = Decimal("0")
    total_additional_debt_payments: Decimal = Decimal("0")
    total_variable_expenses: Decimal = Decimal("0")
    total_goal_contributions: Decimal = Decimal("0")
    remaining_to_budget: Decimal = Decimal("0")
    is_balanced: bool = False


class MonthSummary(LedgerModel):
    """Recurring totals for a single month, shown on the budget overview."""

    month: date
    total_income: Decimal = Decimal("0")
    total_fixed_expenses: Decimal = Decimal("0")
    total_subscriptions: Decimal = Decimal("0")
    total_debt_payments: Decimal = Decimal("0")
    total_goal_contributions: Decimal = Decimal("0")


class ForecastQuery(LedgerModel):
    """``?year=`` for the forecast endpoint; the current year when omitted."""

    year: Optional[int] = Field(None, ge=1900, le=2999)
