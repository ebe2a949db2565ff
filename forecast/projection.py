"""
Date projection for recurring items, debt minimum payments and goal
contributions.

Everything here is pure date arithmetic over in-memory records. Month windows
are inclusive ``[month_start, month_end]`` calendar dates.
"""

import calendar
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator, Optional, Tuple

from models.debts import DebtAccount
from models.goals import FinancialGoal
from models.recurring import RecurringItem

ZERO = Decimal("0")
CENT = Decimal("0.01")

# Debts paid on a weekly cadence repeat inside the month; everything else is
# attributed once per calendar month
_DEBT_STEP_DAYS = {"weekly": 7, "bi-weekly": 14}

_DAY_STEPS = {"daily": 1, "weekly": 7, "bi-weekly": 14}
_MONTH_STEPS = {"monthly": 1, "quarterly": 3, "yearly": 12}


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last calendar day of a month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def add_months(anchor: date, months: int) -> date:
    """
    Shift a date by whole months, clamping to the end of shorter months.

    Always computed from the original anchor so Jan 31 -> Feb 28 -> Mar 31.
    """
    years, month_index = divmod(anchor.month - 1 + months, 12)
    year = anchor.year + years
    month = month_index + 1
    return date(year, month, min(anchor.day, days_in_month(year, month)))


def debt_payment_date(year: int, month: int, day_of_month: int) -> date:
    """The payment date for a fixed day, clamped to the month's last day."""
    return date(year, month, min(day_of_month, days_in_month(year, month)))


def project_debt_payment(
    debt: DebtAccount, month_start: date, month_end: date
) -> Decimal:
    """
    Minimum payments falling inside ``[month_start, month_end]``.

    The debt's creation date plays no part: a full forward year always shows
    a payment in every month, including months before the debt was added.
    """
    candidate = debt_payment_date(
        month_start.year, month_start.month, debt.payment_day_of_month
    )
    step = _DEBT_STEP_DAYS.get(debt.payment_frequency)

    total = ZERO
    while month_start <= candidate <= month_end:
        total += debt.minimum_payment
        if step is None:
            break
        candidate += timedelta(days=step)

    return total


def _occurrences(
    anchor: date, frequency: str, first_index: int, not_before: date
) -> Iterator[date]:
    """Yield scheduled dates from ``anchor`` starting near ``not_before``."""
    if frequency in _DAY_STEPS:
        step = _DAY_STEPS[frequency]
        index = first_index
        if not_before > anchor:
            # Jump straight to the first occurrence on or after not_before
            index = max(index, -(-(not_before - anchor).days // step))
        while True:
            yield anchor + timedelta(days=index * step)
            index += 1

    elif frequency in _MONTH_STEPS:
        step = _MONTH_STEPS[frequency]
        index = first_index
        if not_before > anchor:
            months_apart = (not_before.year - anchor.year) * 12 + (
                not_before.month - anchor.month
            )
            index = max(index, months_apart // step - 1)
        while True:
            yield add_months(anchor, index * step)
            index += 1


def _semi_monthly_amount(
    item: RecurringItem, month_start: date, month_end: date
) -> Decimal:
    pay_dates = [
        d
        for d in (item.semi_monthly_first_pay_date, item.semi_monthly_second_pay_date)
        if d is not None
    ]
    if not pay_dates:
        return ZERO

    first_payday = min(pay_dates)
    total = ZERO
    for pay_date in pay_dates:
        candidate = debt_payment_date(
            month_start.year, month_start.month, pay_date.day
        )
        if not (month_start <= candidate <= month_end):
            continue
        if candidate < first_payday:
            continue
        if item.end_date and candidate > item.end_date:
            continue
        total += item.amount
    return total


def project_recurring_item(
    item: RecurringItem, month_start: date, month_end: date
) -> Decimal:
    """Total amount of a recurring item's occurrences inside the window."""
    if item.end_date and item.end_date < month_start:
        return ZERO

    if item.frequency == "semi-monthly":
        return _semi_monthly_amount(item, month_start, month_end)

    if item.type == "subscription":
        # The renewal date itself is already paid; the next charge is one period on
        anchor: Optional[date] = item.last_renewal_date
        first_index = 1
    else:
        anchor = item.start_date
        first_index = 0

    if anchor is None or anchor > month_end:
        return ZERO

    total = ZERO
    for occurrence in _occurrences(anchor, item.frequency, first_index, month_start):
        if occurrence > month_end:
            break
        if item.end_date and occurrence > item.end_date:
            break
        if occurrence >= month_start:
            total += item.amount

    return total


def months_between(start: date, end: date) -> int:
    """Calendar months from ``start``'s month to ``end``'s month."""
    return (end.year - start.year) * 12 + end.month - start.month


def project_goal_contribution(goal: FinancialGoal, month_start: date) -> Decimal:
    """
    Contribution a goal needs in the month starting at ``month_start``.

    What is still needed is spread evenly over the months up to and including
    the target month. Reached goals and months after the target get nothing.
    """
    needed = goal.amount_needed
    if needed <= 0 or month_start > goal.target_date:
        return ZERO

    months_left = months_between(month_start, goal.target_date) + 1
    return (needed / months_left).quantize(CENT, rounding=ROUND_HALF_UP)
