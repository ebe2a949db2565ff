"""Data access for financial goals and goal contributions."""

import logging
from datetime import date

import requests

from models.goals import (FinancialGoal, FinancialGoalCreate,
                          FinancialGoalUpdate, GoalContributionCreate)
from models.transactions import TransactionCreate
from services.store import Result, RowStore
from services.supabase_client import SupabaseError
from services.transactions import transactions

logger = logging.getLogger(__name__)

# Newest goal first
financial_goals = RowStore(
    FinancialGoal,
    "financial_goals",
    order=("created_at.desc", "name.asc"),
    resource="Financial goal",
    stamp_updated_at=True,
)


def get_financial_goals(user_id: str) -> Result:
    return financial_goals.list(user_id)


def get_financial_goal(user_id: str, goal_id: str) -> Result:
    return financial_goals.get(user_id, goal_id)


def create_financial_goal(user_id: str, goal: FinancialGoalCreate) -> Result:
    return financial_goals.create(user_id, goal)


def update_financial_goal(
    user_id: str, goal_id: str, updates: FinancialGoalUpdate
) -> Result:
    return financial_goals.update(user_id, goal_id, updates)


def delete_financial_goal(user_id: str, goal_id: str) -> Result:
    return financial_goals.delete(user_id, goal_id)


def add_goal_contribution(
    user_id: str, goal_id: str, contribution: GoalContributionCreate
) -> Result:
    """
    Put money towards a goal.

    Raises the goal's ``current_amount`` and records the outgoing transaction,
    through the ``add_goal_contribution`` database function when it is
    available and as two direct writes when the database rejects the call.
    """
    found = get_financial_goal(user_id, goal_id)
    if not found.ok:
        return found
    goal: FinancialGoal = found.data

    description = contribution.description or f"Contribution to {goal.name}"
    try:
        financial_goals.client.rpc(
            "add_goal_contribution",
            {
                "p_goal_id": int(goal_id) if goal_id.isdigit() else goal_id,
                "p_amount": str(contribution.amount),
                "p_user_id": user_id,
                "p_description": description,
            },
        )
        logger.info("Recorded contribution to goal %s for user %s", goal_id, user_id)
        return Result(data=True)
    except requests.RequestException as err:
        logger.error(
            "Couldn't reach add_goal_contribution for goal %s. Error: %s",
            goal_id,
            err,
        )
        return Result(error=str(err))
    except SupabaseError as err:
        logger.warning(
            "add_goal_contribution function failed for goal %s, writing rows "
            "directly. Error: %s",
            goal_id,
            err,
        )

    updated = update_financial_goal(
        user_id,
        goal_id,
        FinancialGoalUpdate(current_amount=goal.current_amount + contribution.amount),
    )
    if not updated.ok:
        return updated

    recorded = transactions.create(
        user_id,
        TransactionCreate(
            date=date.today(),
            description=description,
            amount=-contribution.amount,
            type="expense",
            detailed_type="goal-contribution",
            account_id=contribution.from_account_id,
            source="goal-contribution",
        ),
    )
    if not recorded.ok:
        return recorded

    logger.info("Recorded contribution to goal %s for user %s", goal_id, user_id)
    return Result(data=True)
