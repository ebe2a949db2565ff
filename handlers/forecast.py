"""
Budget forecast handlers.

The forecast is computed on request from the user's recurring items, debts,
variable expenses and goals; nothing is stored.
"""

from datetime import date

from forecast import build_forecast, summarize_month
from models.forecast import ForecastQuery
from services import budget, debts, goals, recurring
from services.store import Result
from utils.decorators import lambda_handler, require_auth, validate_query
from utils.responses import result_error_response, success_response


def _load(user_id: str, *loaders) -> Result:
    """Run each loader for ``user_id``; stop at the first error."""
    loaded = []
    for loader in loaders:
        result = loader(user_id)
        if not result.ok:
            return result
        loaded.append(result.data)
    return Result(data=loaded)


@lambda_handler()
@require_auth
@validate_query(ForecastQuery)
def get_forecast(event, context):
    """
    GET /forecast?year=YYYY

    Twelve monthly forecasts, January through December.
    """
    year = event["query"].year or date.today().year
    result = _load(
        event["auth"]["user_id"],
        recurring.get_recurring_items,
        debts.get_debt_accounts,
        budget.get_variable_expenses,
        goals.get_financial_goals,
    )
    if not result.ok:
        return result_error_response("Forecast", result.error)

    months = build_forecast(year, *result.data)
    return success_response(data={"year": year, "months": months})


@lambda_handler()
@require_auth
def get_month_summary(event, context):
    """GET /forecast/summary: recurring and goal totals for the current month."""
    result = _load(
        event["auth"]["user_id"],
        recurring.get_recurring_items,
        debts.get_debt_accounts,
        goals.get_financial_goals,
    )
    if not result.ok:
        return result_error_response("Forecast", result.error)

    recurring_items, debt_accounts, financial_goals = result.data
    return success_response(
        data=summarize_month(
            date.today(), recurring_items, debt_accounts, financial_goals
        )
    )
