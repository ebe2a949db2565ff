"""Data access for budget categories and variable expenses."""

import logging
from datetime import date
from typing import Any, Dict, List

from models.budget import (BudgetCategory, BudgetCategoryCreate,
                           BudgetCategoryUpdate, VariableExpense,
                           VariableExpenseCreate, VariableExpenseUpdate)
from services.store import EXPECTED_ERRORS, Result, RowStore

logger = logging.getLogger(__name__)

budget_categories = RowStore(
    BudgetCategory, "budget_categories", resource="Budget category"
)
variable_expenses = RowStore(
    VariableExpense,
    "variable_expenses",
    resource="Variable expense",
    stamp_updated_at=True,
)


def get_budget_categories(user_id: str) -> Result:
    return budget_categories.list(user_id)


def get_budget_category(user_id: str, category_id: str) -> Result:
    return budget_categories.get(user_id, category_id)


def create_budget_category(user_id: str, category: BudgetCategoryCreate) -> Result:
    return budget_categories.create(user_id, category)


def update_budget_category(
    user_id: str, category_id: str, updates: BudgetCategoryUpdate
) -> Result:
    return budget_categories.update(user_id, category_id, updates)


def delete_budget_category(user_id: str, category_id: str) -> Result:
    return budget_categories.delete(user_id, category_id)


def get_budget_category_spending(
    user_id: str, start: date, end: date
) -> Result:
    """
    Budgeted vs actual spending per budget category over a period.

    Aggregation happens in the ``get_budget_category_spending`` database
    function.
    """
    try:
        rows: List[Dict[str, Any]] = budget_categories.client.rpc(
            "get_budget_category_spending",
            {
                "p_user_id": user_id,
                "p_start_date": start.isoformat(),
                "p_end_date": end.isoformat(),
            },
        )
        return Result(data=rows or [])
    except EXPECTED_ERRORS as err:
        logger.error(
            "Couldn't get budget category spending for user %s. Error: %s",
            user_id,
            err,
        )
        return Result(error=str(err))


def get_variable_expenses(user_id: str) -> Result:
    return variable_expenses.list(user_id)


def get_variable_expense(user_id: str, expense_id: str) -> Result:
    return variable_expenses.get(user_id, expense_id)


def create_variable_expense(user_id: str, expense: VariableExpenseCreate) -> Result:
    return variable_expenses.create(user_id, expense)


def update_variable_expense(
    user_id: str, expense_id: str, updates: VariableExpenseUpdate
) -> Result:
    return variable_expenses.update(user_id, expense_id, updates)


def delete_variable_expense(user_id: str, expense_id: str) -> Result:
    return variable_expenses.delete(user_id, expense_id)
