"""
Debt handlers for the Pocket Ledger API.

Debt accounts are a CRUD resource under /debts. On top of that:
- /debts/plan returns the debts in payoff order with totals
- /debts/strategy reads or sets the snowball/avalanche strategy
- /debts/{id}/payments records a payment against one debt
"""

import logging

from handlers.crud import make_crud_handlers
from models.debts import (DebtAccountCreate, DebtAccountUpdate,
                          DebtPaymentCreate, DebtStrategyUpdate)
from services import debts
from utils.decorators import (extract_path_params, lambda_handler,
                              require_auth, validate_json_body, validate_model)
from utils.responses import (HTTPStatus, result_error_response,
                             success_response)

logger = logging.getLogger(__name__)

(
    create_debt,
    get_debt,
    list_debts,
    update_debt,
    delete_debt,
) = make_crud_handlers(
    "Debt account",
    DebtAccountCreate,
    DebtAccountUpdate,
    create_fn=debts.create_debt_account,
    get_fn=debts.get_debt_account,
    list_fn=debts.get_debt_accounts,
    update_fn=debts.update_debt_account,
    delete_fn=debts.delete_debt_account,
)


@lambda_handler()
@require_auth
def get_debt_plan(event, context):
    """
    Get the authenticated user's debt payoff plan.

    GET /debts/plan

    Debts are ordered by the chosen strategy: smallest balance first for
    snowball, highest APR first for avalanche or when no strategy is set.

    Args:
        event: Lambda event object (with auth context from authorizer)
        context: Lambda context object

    Returns:
        HTTP response with strategy, totals and ordered debt accounts
    """
    result = debts.get_debt_plan(event["auth"]["user_id"])
    if not result.ok:
        return result_error_response("Debt plan", result.error)

    return success_response(data=result.data.summary())


@lambda_handler()
@require_auth
def get_debt_strategy(event, context):
    """GET /debts/strategy"""
    result = debts.get_debt_payoff_strategy(event["auth"]["user_id"])
    if not result.ok:
        return result_error_response("Debt strategy", result.error)
    return success_response(data={"strategy": result.data})


@lambda_handler()
@require_auth
@validate_json_body(required_fields=["strategy"])
@validate_model(DebtStrategyUpdate)
def set_debt_strategy(event, context):
    """PUT /debts/strategy with ``{"strategy": "snowball" | "avalanche"}``"""
    strategy = event["model"].strategy
    result = debts.set_debt_payoff_strategy(event["auth"]["user_id"], strategy)
    if not result.ok:
        return result_error_response("Debt strategy", result.error)

    return success_response(
        data={"strategy": result.data},
        message=f"Debt payoff strategy set to {strategy}",
    )


@lambda_handler()
@require_auth
@extract_path_params("id")
@validate_json_body(required_fields=["amount"])
@validate_model(DebtPaymentCreate)
def make_debt_payment(event, context):
    """
    Record a payment against a debt.

    POST /debts/{id}/payments

    Lowers the debt balance by the payment amount and records the outgoing
    transaction.

    Args:
        event: Lambda event object with the debt id path parameter
        context: Lambda context object

    Returns:
        HTTP 201 response, 404 if the debt does not exist
    """
    debt_id = event["path_params"]["id"]
    payment = event["model"]
    result = debts.make_debt_payment(event["auth"]["user_id"], debt_id, payment)
    if not result.ok:
        return result_error_response("Debt payment", result.error)

    logger.info("Payment of %s recorded on debt %s", payment.amount, debt_id)
    return success_response(
        data={"debtAccountId": debt_id, "amount": payment.amount},
        message="Payment recorded successfully",
        status_code=HTTPStatus.CREATED,
    )
