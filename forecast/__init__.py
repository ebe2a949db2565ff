"""
Forecast package: pure calculators for budget projections and debt payoff.
"""

from .budget import (build_forecast, forecast_month, goal_contribution_items,
                     summarize_month)
from .payoff import order_debts
from .projection import (add_months, debt_payment_date, month_bounds,
                         months_between, project_debt_payment,
                         project_goal_contribution, project_recurring_item)

__all__ = [
    "build_forecast",
    "forecast_month",
    "summarize_month",
    "goal_contribution_items",
    "order_debts",
    "add_months",
    "debt_payment_date",
    "month_bounds",
    "months_between",
    "project_debt_payment",
    "project_goal_contribution",
    "project_recurring_item",
]
