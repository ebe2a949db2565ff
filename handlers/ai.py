"""
AI suggestion handlers.

POST /ai/categorize            {"transactionDescription": "..."}
POST /ai/suggest-categories    {"description": "..."}

Model or network failures are not handled here and surface as a 500 from
``lambda_handler``.
"""

from services.ai_flows import (CategorizeTransactionInput,
                               SuggestCategoriesInput, categorize_transaction,
                               suggest_categories)
from utils.decorators import (lambda_handler, require_auth,
                              validate_json_body, validate_model)
from utils.responses import success_response


@lambda_handler()
@require_auth
@validate_json_body(required_fields=["transactionDescription"])
@validate_model(CategorizeTransactionInput)
def categorize(event, context):
    return success_response(data=categorize_transaction(event["model"]))


@lambda_handler()
@require_auth
@validate_json_body(required_fields=["description"])
@validate_model(SuggestCategoriesInput)
def suggest(event, context):
    return success_response(data=suggest_categories(event["model"]))
