"""
Transaction handlers for /transactions.

The list accepts ``startDate``, ``endDate``, ``categoryId``, ``accountId``,
``limit`` and ``offset`` query parameters.
"""

from handlers.crud import make_crud_handlers
from models.transactions import (TransactionCreate, TransactionQuery,
                                 TransactionUpdate)
from services import transactions
from utils.decorators import lambda_handler, require_auth, validate_query
from utils.responses import result_error_response, success_response

(
    create_transaction,
    get_transaction,
    _,
    update_transaction,
    delete_transaction,
) = make_crud_handlers(
    "Transaction",
    TransactionCreate,
    TransactionUpdate,
    create_fn=transactions.create_transaction,
    get_fn=transactions.get_transaction,
    list_fn=transactions.get_transactions,
    update_fn=transactions.update_transaction,
    delete_fn=transactions.delete_transaction,
)


@lambda_handler()
@require_auth
@validate_query(TransactionQuery)
def list_transactions(event, context):
    """GET /transactions, newest first."""
    result = transactions.get_transactions(event["auth"]["user_id"], event["query"])
    if not result.ok:
        return result_error_response("Transaction", result.error)
    return success_response(data=result.data)
