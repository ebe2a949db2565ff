"""
Budget handlers.

/budget-categories and /variable-expenses are plain CRUD resources;
/budget-categories/spending reports budgeted vs actual amounts per category.
"""

from handlers.crud import make_crud_handlers
from models.budget import (BudgetCategoryCreate, BudgetCategoryUpdate,
                           SpendingPeriod, VariableExpenseCreate,
                           VariableExpenseUpdate)
from services import budget
from utils.decorators import lambda_handler, require_auth, validate_query
from utils.responses import result_error_response, success_response

(
    create_budget_category,
    get_budget_category,
    list_budget_categories,
    update_budget_category,
    delete_budget_category,
) = make_crud_handlers(
    "Budget category",
    BudgetCategoryCreate,
    BudgetCategoryUpdate,
    create_fn=budget.create_budget_category,
    get_fn=budget.get_budget_category,
    list_fn=budget.get_budget_categories,
    update_fn=budget.update_budget_category,
    delete_fn=budget.delete_budget_category,
)

(
    create_variable_expense,
    get_variable_expense,
    list_variable_expenses,
    update_variable_expense,
    delete_variable_expense,
) = make_crud_handlers(
    "Variable expense",
    VariableExpenseCreate,
    VariableExpenseUpdate,
    create_fn=budget.create_variable_expense,
    get_fn=budget.get_variable_expense,
    list_fn=budget.get_variable_expenses,
    update_fn=budget.update_variable_expense,
    delete_fn=budget.delete_variable_expense,
)


@lambda_handler()
@require_auth
@validate_query(SpendingPeriod)
def get_budget_spending(event, context):
    """
    GET /budget-categories/spending?startDate=YYYY-MM-DD&endDate=YYYY-MM-DD
    """
    period = event["query"]
    result = budget.get_budget_category_spending(
        event["auth"]["user_id"], period.start_date, period.end_date
    )
    if not result.ok:
        return result_error_response("Budget spending", result.error)
    return success_response(data=result.data)
