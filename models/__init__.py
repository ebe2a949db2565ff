"""
Models package for data structures and database entities.

This package contains Pydantic models for validation and for mapping between
Supabase rows (snake_case) and API payloads (camelCase).
"""

from .accounts import Account, AccountCreate, AccountUpdate
from .base import (DatePeriod, LedgerModel, LedgerRecord, RecordCreate,
                   RecordUpdate)
from .budget import (BudgetCategory, BudgetCategoryCreate,
                     BudgetCategoryUpdate, SpendingPeriod, VariableExpense,
                     VariableExpenseCreate, VariableExpenseUpdate)
from .categories import Category, CategoryCreate, CategoryUpdate
from .debts import (DebtAccount, DebtAccountCreate, DebtAccountUpdate,
                    DebtPaymentCreate, DebtPlan, DebtStrategyUpdate)
from .forecast import ForecastQuery, MonthlyForecast, MonthSummary
from .goals import (FinancialGoal, FinancialGoalCreate, FinancialGoalUpdate,
                    GoalContributionCreate)
from .recurring import (GenerationPeriod, RecurringItem, RecurringItemCreate,
                        RecurringItemUpdate)
from .transactions import (Transaction, TransactionCreate, TransactionQuery,
                           TransactionUpdate)
from .users import Credentials, User, UserPreferences, UserProfile

__all__ = [
    "LedgerModel",
    "LedgerRecord",
    "RecordCreate",
    "RecordUpdate",
    "DatePeriod",
    "Account",
    "AccountCreate",
    "AccountUpdate",
    "Category",
    "CategoryCreate",
    "CategoryUpdate",
    "BudgetCategory",
    "BudgetCategoryCreate",
    "BudgetCategoryUpdate",
    "SpendingPeriod",
    "VariableExpense",
    "VariableExpenseCreate",
    "VariableExpenseUpdate",
    "DebtAccount",
    "DebtAccountCreate",
    "DebtAccountUpdate",
    "DebtPaymentCreate",
    "DebtPlan",
    "DebtStrategyUpdate",
    "FinancialGoal",
    "FinancialGoalCreate",
    "FinancialGoalUpdate",
    "GoalContributionCreate",
    "GenerationPeriod",
    "RecurringItem",
    "RecurringItemCreate",
    "RecurringItemUpdate",
    "Transaction",
    "TransactionCreate",
    "TransactionQuery",
    "TransactionUpdate",
    "ForecastQuery",
    "MonthlyForecast",
    "MonthSummary",
    "User",
    "UserPreferences",
    "UserProfile",
    "Credentials",
]
