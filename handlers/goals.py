"""
Financial goal handlers.

/goals is a CRUD resource; /goals/{id}/contributions puts money towards a goal.
"""

import logging

from handlers.crud import make_crud_handlers
from models.goals import (FinancialGoalCreate, FinancialGoalUpdate,
                          GoalContributionCreate)
from services import goals
from utils.decorators import (extract_path_params, lambda_handler,
                              require_auth, validate_json_body, validate_model)
from utils.responses import (HTTPStatus, result_error_response,
                             success_response)

logger = logging.getLogger(__name__)

(
    create_goal,
    get_goal,
    list_goals,
    update_goal,
    delete_goal,
) = make_crud_handlers(
    "Financial goal",
    FinancialGoalCreate,
    FinancialGoalUpdate,
    create_fn=goals.create_financial_goal,
    get_fn=goals.get_financial_goal,
    list_fn=goals.get_financial_goals,
    update_fn=goals.update_financial_goal,
    delete_fn=goals.delete_financial_goal,
)


@lambda_handler()
@require_auth
@extract_path_params("id")
@validate_json_body(required_fields=["amount"])
@validate_model(GoalContributionCreate)
def add_goal_contribution(event, context):
    """
    POST /goals/{id}/contributions

    Raises the goal's current amount and records the outgoing transaction.
    Returns 201, or 404 if the goal does not exist.
    """
    goal_id = event["path_params"]["id"]
    contribution = event["model"]
    result = goals.add_goal_contribution(
        event["auth"]["user_id"], goal_id, contribution
    )
    if not result.ok:
        return result_error_response("Goal contribution", result.error)

    logger.info("Contribution of %s recorded on goal %s", contribution.amount, goal_id)
    return success_response(
        data={"goalId": goal_id, "amount": contribution.amount},
        message="Contribution recorded successfully",
        status_code=HTTPStatus.CREATED,
    )
