from datetime import date, datetime, timezone
from decimal import Decimal

from forecast.projection import (add_months, debt_payment_date, month_bounds,
                                 project_debt_payment, project_recurring_item)


def _month_total(project, record, year, month):
    start, end = month_bounds(year, month)
    return project(record, start, end)


def test_monthly_debt_is_paid_every_month_of_the_year(make_debt):
    debt = make_debt(minimum_payment=Decimal("75"))

    totals = [_month_total(project_debt_payment, debt, 2024, m) for m in range(1, 13)]

    assert totals == [Decimal("75")] * 12


def test_debt_projection_ignores_creation_date(make_debt):
    # Added in December; earlier months still show the payment
    debt = make_debt(created_at=datetime(2024, 12, 20, tzinfo=timezone.utc))

    total = sum(
        _month_total(project_debt_payment, debt, 2024, m) for m in range(1, 13)
    )

    assert total == Decimal("50") * 12


def test_payment_day_31_is_clamped_to_month_end(make_debt):
    debt = make_debt(payment_day_of_month=31)

    assert debt_payment_date(2023, 4, 31) == date(2023, 4, 30)
    assert debt_payment_date(2023, 2, 31) == date(2023, 2, 28)
    assert _month_total(project_debt_payment, debt, 2023, 4) == Decimal("50")
    assert _month_total(project_debt_payment, debt, 2023, 2) == Decimal("50")


def test_leap_year_february(make_debt):
    debt = make_debt(payment_day_of_month=29)

    assert debt_payment_date(2024, 2, 29) == date(2024, 2, 29)
    assert debt_payment_date(2023, 2, 29) == date(2023, 2, 28)
    assert _month_total(project_debt_payment, debt, 2024, 2) == Decimal("50")
    assert _month_total(project_debt_payment, debt, 2023, 2) == Decimal("50")


def test_weekly_and_biweekly_debts_repeat_within_the_month(make_debt):
    weekly = make_debt(payment_day_of_month=1, payment_frequency="weekly")
    biweekly = make_debt(payment_day_of_month=1, payment_frequency="bi-weekly")

    # January 2024: the 1st, 8th, 15th, 22nd and 29th
    assert _month_total(project_debt_payment, weekly, 2024, 1) == Decimal("250")
    # the 1st, 15th and 29th
    assert _month_total(project_debt_payment, biweekly, 2024, 1) == Decimal("150")


def test_annual_debt_is_attributed_once_per_month(make_debt):
    debt = make_debt(payment_frequency="annually")

    assert _month_total(project_debt_payment, debt, 2024, 6) == Decimal("50")


def test_add_months_clamps_without_drifting():
    anchor = date(2024, 1, 31)

    assert add_months(anchor, 1) == date(2024, 2, 29)
    assert add_months(anchor, 2) == date(2024, 3, 31)
    assert add_months(anchor, 13) == date(2025, 2, 28)
    assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)


def test_monthly_income_from_start_date(make_item):
    item = make_item(start_date=date(2024, 3, 10))

    assert _month_total(project_recurring_item, item, 2024, 2) == Decimal("0")
    assert _month_total(project_recurring_item, item, 2024, 3) == Decimal("1000")
    assert _month_total(project_recurring_item, item, 2024, 11) == Decimal("1000")


def test_month_end_start_date_lands_on_last_day(make_item):
    item = make_item(start_date=date(2024, 1, 31))

    assert _month_total(project_recurring_item, item, 2024, 2) == Decimal("1000")
    assert _month_total(project_recurring_item, item, 2024, 4) == Decimal("1000")


def test_weekly_income_counts_each_payday(make_item):
    # 2024-01-05 is a Friday: 5, 12, 19, 26 January, then 2 February
    item = make_item(frequency="weekly", start_date=date(2024, 1, 5))

    assert _month_total(project_recurring_item, item, 2024, 1) == Decimal("4000")
    assert _month_total(project_recurring_item, item, 2024, 3) == Decimal("5000")


def test_subscription_renews_one_period_after_last_renewal(make_item):
    item = make_item(
        type="subscription",
        amount=Decimal("15.99"),
        last_renewal_date=date(2024, 1, 10),
    )

    assert _month_total(project_recurring_item, item, 2024, 1) == Decimal("0")
    assert _month_total(project_recurring_item, item, 2024, 2) == Decimal("15.99")


def test_yearly_subscription_only_in_renewal_month(make_item):
    item = make_item(
        type="subscription",
        frequency="yearly",
        amount=Decimal("99"),
        last_renewal_date=date(2023, 3, 5),
    )

    totals = [
        _month_total(project_recurring_item, item, 2024, m) for m in range(1, 13)
    ]

    assert totals[2] == Decimal("99")
    assert sum(totals) == Decimal("99")


def test_semi_monthly_pays_on_both_days(make_item):
    item = make_item(
        frequency="semi-monthly",
        semi_monthly_first_pay_date=date(2024, 1, 1),
        semi_monthly_second_pay_date=date(2024, 1, 15),
    )

    assert _month_total(project_recurring_item, item, 2023, 12) == Decimal("0")
    assert _month_total(project_recurring_item, item, 2024, 1) == Decimal("2000")
    assert _month_total(project_recurring_item, item, 2024, 7) == Decimal("2000")


def test_end_date_stops_projection(make_item):
    item = make_item(start_date=date(2024, 1, 20), end_date=date(2024, 4, 30))

    assert _month_total(project_recurring_item, item, 2024, 4) == Decimal("1000")
    assert _month_total(project_recurring_item, item, 2024, 5) == Decimal("0")


def test_item_without_anchor_projects_nothing(make_item):
    item = make_item()

    assert _month_total(project_recurring_item, item, 2024, 1) == Decimal("0")
