"""Data access for recurring items."""

import logging
from datetime import date

from models.recurring import (RecurringItem, RecurringItemCreate,
                              RecurringItemUpdate)
from services.store import EXPECTED_ERRORS, Result, RowStore

logger = logging.getLogger(__name__)

recurring_items = RowStore(
    RecurringItem, "recurring_items", resource="Recurring item", stamp_updated_at=True
)


def get_recurring_items(user_id: str) -> Result:
    return recurring_items.list(user_id)


def get_recurring_item(user_id: str, item_id: str) -> Result:
    return recurring_items.get(user_id, item_id)


def create_recurring_item(user_id: str, item: RecurringItemCreate) -> Result:
    return recurring_items.create(user_id, item)


def update_recurring_item(
    user_id: str, item_id: str, updates: RecurringItemUpdate
) -> Result:
    return recurring_items.update(user_id, item_id, updates)


def delete_recurring_item(user_id: str, item_id: str) -> Result:
    return recurring_items.delete(user_id, item_id)


def generate_transactions_from_recurring(
    user_id: str, start: date, end: date
) -> Result:
    """
    Materialize the user's recurring items as transactions for a period.

    The ``generate_transactions_from_recurring`` database function does the
    work; ``Result.data`` is the number of transactions it created.
    """
    try:
        data = recurring_items.client.rpc(
            "generate_transactions_from_recurring",
            {
                "p_user_id": user_id,
                "p_start_date": start.isoformat(),
                "p_end_date": end.isoformat(),
            },
        )
    except EXPECTED_ERRORS as err:
        logger.error(
            "Couldn't generate transactions from recurring items for user %s. "
            "Error: %s",
            user_id,
            err,
        )
        return Result(error=str(err))

    count = data.get("count") if isinstance(data, dict) else data
    logger.info(
        "Generated %s transactions from recurring items for user %s", count, user_id
    )
    return Result(data=count or 0)
