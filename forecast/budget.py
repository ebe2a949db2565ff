"""
Twelve-month budget forecast.

Combines recurring items, debt minimum payments, variable expenses and goal
contributions into a per-month plan for a forecast year.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Sequence

from forecast.projection import (ZERO, month_bounds, project_debt_payment,
                                 project_goal_contribution,
                                 project_recurring_item)
from models.budget import VariableExpense
from models.debts import DebtAccount
from models.forecast import (DebtPaymentLineItem, ForecastLineItem,
                             GoalContributionLineItem, MonthlyForecast,
                             MonthSummary, VariableExpenseLineItem)
from models.goals import FinancialGoal
from models.recurring import RecurringItem

BALANCE_TOLERANCE = Decimal("0.01")


def _total(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def goal_contribution_items(
    goals: Sequence[FinancialGoal], month_start: date
) -> List[GoalContributionLineItem]:
    """Contributions for the month, soonest target first."""
    items = []
    for goal in sorted(goals, key=lambda g: g.target_date):
        amount = project_goal_contribution(goal, month_start)
        if amount > 0:
            items.append(
                GoalContributionLineItem(
                    id=goal.id, name=goal.name, month_specific_contribution=amount
                )
            )
    return items


def forecast_month(
    year: int,
    month: int,
    recurring_items: Sequence[RecurringItem],
    debt_accounts: Sequence[DebtAccount],
    variable_expenses: Sequence[VariableExpense] = (),
    goals: Sequence[FinancialGoal] = (),
) -> MonthlyForecast:
    """Project a single calendar month."""
    month_start, month_end = month_bounds(year, month)

    income_items: List[ForecastLineItem] = []
    fixed_expense_items: List[ForecastLineItem] = []
    subscription_items: List[ForecastLineItem] = []

    for item in recurring_items:
        amount = project_recurring_item(item, month_start, month_end)
        if amount <= 0:
            continue

        line = ForecastLineItem(
            id=item.id,
            name=item.name,
            total_amount_in_month=amount,
            category_id=item.category_id,
        )
        if item.type == "income":
            income_items.append(line)
        elif item.type == "fixed-expense":
            fixed_expense_items.append(line)
        elif item.type == "subscription":
            subscription_items.append(line)

    debt_payment_items = []
    for debt in debt_accounts:
        amount = project_debt_payment(debt, month_start, month_end)
        if amount > 0:
            debt_payment_items.append(
                DebtPaymentLineItem(
                    id=debt.id,
                    name=debt.name,
                    total_amount_in_month=amount,
                    debt_type=debt.type,
                )
            )

    variable_lines = [
        VariableExpenseLineItem(
            id=expense.id, name=expense.name, month_specific_amount=expense.amount
        )
        for expense in variable_expenses
    ]
    goal_lines = goal_contribution_items(goals, month_start)

    total_income = _total(i.total_amount_in_month for i in income_items)
    total_fixed = _total(i.total_amount_in_month for i in fixed_expense_items)
    total_subscriptions = _total(i.total_amount_in_month for i in subscription_items)
    total_debt_minimum = _total(i.total_amount_in_month for i in debt_payment_items)
    total_additional = _total(i.additional_payment for i in debt_payment_items)
    total_variable = _total(v.month_specific_amount for v in variable_lines)
    total_goals = _total(g.month_specific_contribution for g in goal_lines)

    remaining = total_income - (
        total_fixed
        + total_subscriptions
        + total_debt_minimum
        + total_additional
        + total_variable
        + total_goals
    )

    return MonthlyForecast(
        month=month_start,
        month_label=month_start.strftime("%B %Y"),
        income_items=income_items,
        fixed_expense_items=fixed_expense_items,
        subscription_items=subscription_items,
        debt_payment_items=debt_payment_items,
        variable_expenses=variable_lines,
        goal_contributions=goal_lines,
        total_income=total_income,
        total_fixed_expenses=total_fixed,
        total_subscriptions=total_subscriptions,
        total_debt_minimum_payments=total_debt_minimum,
        total_additional_debt_payments=total_additional,
        total_variable_expenses=total_variable,
        total_goal_contributions=total_goals,
        remaining_to_budget=remaining,
        is_balanced=abs(remaining) < BALANCE_TOLERANCE,
    )


def build_forecast(
    year: int,
    recurring_items: Sequence[RecurringItem],
    debt_accounts: Sequence[DebtAccount],
    variable_expenses: Sequence[VariableExpense] = (),
    goals: Sequence[FinancialGoal] = (),
) -> List[MonthlyForecast]:
    """Forecast every month of ``year``, January through December."""
    return [
        forecast_month(
            year, month, recurring_items, debt_accounts, variable_expenses, goals
        )
        for month in range(1, 13)
    ]


def summarize_month(
    today: date,
    recurring_items: Sequence[RecurringItem],
    debt_accounts: Sequence[DebtAccount],
    goals: Sequence[FinancialGoal] = (),
) -> MonthSummary:
    """Recurring totals for the month containing ``today``."""
    forecast = forecast_month(today.year, today.month, recurring_items, debt_accounts)

    # Goals whose target date has already passed are overdue, not budgeted
    open_goals = [goal for goal in goals if goal.target_date >= today]
    month_goals = goal_contribution_items(open_goals, forecast.month)

    return MonthSummary(
        month=forecast.month,
        total_income=forecast.total_income,
        total_fixed_expenses=forecast.total_fixed_expenses,
        total_subscriptions=forecast.total_subscriptions,
        total_debt_payments=forecast.total_debt_minimum_payments,
        total_goal_contributions=_total(
            g.month_specific_contribution for g in month_goals
        ),
    )
