"""
Recurring item handlers.

/recurring-items is a CRUD resource; /recurring-items/generate-transactions
writes the items' occurrences in a period to the transaction ledger.
"""

from handlers.crud import make_crud_handlers
from models.recurring import (GenerationPeriod, RecurringItemCreate,
                              RecurringItemUpdate)
from services import recurring
from utils.decorators import (lambda_handler, require_auth, validate_json_body,
                              validate_model)
from utils.responses import HTTPStatus, result_error_response, success_response

(
    create_recurring_item,
    get_recurring_item,
    list_recurring_items,
    update_recurring_item,
    delete_recurring_item,
) = make_crud_handlers(
    "Recurring item",
    RecurringItemCreate,
    RecurringItemUpdate,
    create_fn=recurring.create_recurring_item,
    get_fn=recurring.get_recurring_item,
    list_fn=recurring.get_recurring_items,
    update_fn=recurring.update_recurring_item,
    delete_fn=recurring.delete_recurring_item,
)


@lambda_handler()
@require_auth
@validate_json_body(required_fields=["startDate", "endDate"])
@validate_model(GenerationPeriod)
def generate_transactions(event, context):
    """POST /recurring-items/generate-transactions with ``startDate``/``endDate``"""
    period = event["model"]
    result = recurring.generate_transactions_from_recurring(
        event["auth"]["user_id"], period.start_date, period.end_date
    )
    if not result.ok:
        return result_error_response("Transaction generation", result.error)

    return success_response(
        data={"count": result.data},
        message=f"Generated {result.data} transactions",
        status_code=HTTPStatus.CREATED,
    )
