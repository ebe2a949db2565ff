"""Data access for transactions."""

from typing import Optional

from models.transactions import (Transaction, TransactionCreate,
                                 TransactionQuery, TransactionUpdate)
from services.store import Result, RowStore

# Newest first; id breaks ties between same-day entries
transactions = RowStore(
    Transaction,
    "transactions",
    order=("date.desc", "id.asc"),
    stamp_updated_at=True,
)


def get_transactions(user_id: str, query: Optional[TransactionQuery] = None) -> Result:
    """List the user's transactions, optionally filtered and paginated."""
    query = query or TransactionQuery()

    filters = {}
    if query.category_id:
        filters["category_id"] = query.category_id
    if query.account_id:
        filters["account_id"] = query.account_id
    if query.type:
        filters["type"] = query.type

    conditions = []
    if query.start_date:
        conditions.append(("date", "gte", query.start_date.isoformat()))
    if query.end_date:
        conditions.append(("date", "lte", query.end_date.isoformat()))

    return transactions.list(
        user_id,
        filters=filters,
        conditions=conditions,
        limit=query.limit,
        offset=query.offset,
    )


def get_transaction(user_id: str, transaction_id: str) -> Result:
    return transactions.get(user_id, transaction_id)


def create_transaction(user_id: str, transaction: TransactionCreate) -> Result:
    return transactions.create(user_id, transaction)


def update_transaction(
    user_id: str, transaction_id: str, updates: TransactionUpdate
) -> Result:
    return transactions.update(user_id, transaction_id, updates)


def delete_transaction(user_id: str, transaction_id: str) -> Result:
    return transactions.delete(user_id, transaction_id)
