"""
Data access for debt accounts, the payoff strategy, and debt payments.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

import requests

from models.debts import (DebtAccount, DebtAccountCreate, DebtAccountUpdate,
                          DebtPaymentCreate, DebtPlan)
from forecast.payoff import PAYOFF_STRATEGIES, order_debts
from models.transactions import TransactionCreate
from services.store import EXPECTED_ERRORS, Result, RowStore
from services.supabase_client import SupabaseError
from services.transactions import transactions

logger = logging.getLogger(__name__)

PREFERENCES_TABLE = "user_preferences"

# Highest APR first, which is also the avalanche order
debt_accounts = RowStore(
    DebtAccount,
    "debt_accounts",
    order=("apr.desc", "name.asc"),
    resource="Debt account",
    stamp_updated_at=True,
)


def get_debt_accounts(user_id: str) -> Result:
    return debt_accounts.list(user_id)


def get_debt_account(user_id: str, debt_id: str) -> Result:
    return debt_accounts.get(user_id, debt_id)


def create_debt_account(user_id: str, debt: DebtAccountCreate) -> Result:
    return debt_accounts.create(user_id, debt)


def update_debt_account(
    user_id: str, debt_id: str, updates: DebtAccountUpdate
) -> Result:
    return debt_accounts.update(user_id, debt_id, updates)


def delete_debt_account(user_id: str, debt_id: str) -> Result:
    return debt_accounts.delete(user_id, debt_id)


def get_debt_payoff_strategy(user_id: str) -> Result:
    """The user's payoff strategy, ``None`` when never chosen."""
    try:
        rows = debt_accounts.client.select(
            PREFERENCES_TABLE,
            filters={"user_id": user_id},
            columns="debt_payoff_strategy",
            limit=1,
        )
    except EXPECTED_ERRORS as err:
        logger.error(
            "Couldn't get debt payoff strategy for user %s. Error: %s", user_id, err
        )
        return Result(error=str(err))

    strategy = rows[0].get("debt_payoff_strategy") if rows else None
    return Result(data=strategy)


def set_debt_payoff_strategy(user_id: str, strategy: str) -> Result:
    """Store the strategy, creating the preferences row if needed."""
    client = debt_accounts.client
    try:
        existing = client.select(
            PREFERENCES_TABLE, filters={"user_id": user_id}, columns="id", limit=1
        )
        if existing:
            client.update(
                PREFERENCES_TABLE,
                {"debt_payoff_strategy": strategy},
                filters={"user_id": user_id},
            )
        else:
            client.insert(
                PREFERENCES_TABLE,
                {"user_id": user_id, "debt_payoff_strategy": strategy},
            )
    except EXPECTED_ERRORS as err:
        logger.error(
            "Couldn't set debt payoff strategy %s for user %s. Error: %s",
            strategy,
            user_id,
            err,
        )
        return Result(error=str(err))

    logger.info("Set debt payoff strategy for user %s to %s", user_id, strategy)
    return Result(data=strategy)


def get_debt_plan(user_id: str) -> Result:
    """The user's debts in payoff order, together with the strategy."""
    debts = get_debt_accounts(user_id)
    if not debts.ok:
        return debts

    strategy = get_debt_payoff_strategy(user_id)
    if not strategy.ok:
        return strategy

    chosen = strategy.data
    if chosen not in PAYOFF_STRATEGIES:
        if chosen is not None:
            logger.warning(
                "Ignoring unknown payoff strategy %r for user %s", chosen, user_id
            )
        chosen = None

    return Result(
        data=DebtPlan(
            debt_accounts=order_debts(debts.data, chosen),
            strategy=chosen,
            user_id=user_id,
        )
    )


def make_debt_payment(
    user_id: str, debt_id: str, payment: DebtPaymentCreate
) -> Result:
    """
    Record a payment against a debt.

    The ``make_debt_payment`` database function does the balance update and
    transaction insert atomically. When the database rejects the call (for
    instance because the function is not installed) the same two writes are
    issued one after the other. Network errors are returned as they are: the
    function may already have run.
    """
    try:
        debt_accounts.client.rpc(
            "make_debt_payment",
            {
                "p_debt_account_id": debt_id,
                "p_amount": str(payment.amount),
                "p_user_id": user_id,
                "p_from_account_id": payment.from_account_id,
                "p_notes": payment.notes,
            },
        )
        logger.info("Recorded payment on debt %s for user %s", debt_id, user_id)
        return Result(data=True)
    except requests.RequestException as err:
        logger.error(
            "Couldn't reach make_debt_payment for debt %s. Error: %s", debt_id, err
        )
        return Result(error=str(err))
    except SupabaseError as err:
        logger.warning(
            "make_debt_payment function failed for debt %s, writing rows directly. "
            "Error: %s",
            debt_id,
            err,
        )

    return _apply_payment(user_id, debt_id, payment)


def _apply_payment(
    user_id: str, debt_id: str, payment: DebtPaymentCreate
) -> Result:
    found = get_debt_account(user_id, debt_id)
    if not found.ok:
        return found
    debt: DebtAccount = found.data

    new_balance = max(debt.balance - payment.amount, Decimal("0"))
    updated = update_debt_account(
        user_id, debt_id, DebtAccountUpdate(balance=new_balance)
    )
    if not updated.ok:
        return updated

    recorded = transactions.create(
        user_id,
        TransactionCreate(
            date=date.today(),
            description=_payment_description(debt.name, payment.notes),
            amount=-payment.amount,
            type="expense",
            detailed_type="debt-payment",
            account_id=payment.from_account_id,
            source="debt-payment",
        ),
    )
    if not recorded.ok:
        return recorded

    logger.info("Recorded payment on debt %s for user %s", debt_id, user_id)
    return Result(data=True)


def _payment_description(debt_name: str, notes: Optional[str]) -> str:
    description = f"Payment to {debt_name}"
    if notes:
        description = f"{description}: {notes}"
    return description[:255]
