"""
Row store: user-scoped CRUD over one Supabase table.

Every operation returns a ``Result``. Expected failures (missing rows,
constraint violations, network errors) come back as ``Result.error`` strings
instead of exceptions; callers check ``result.ok`` before using ``result.data``.
"""

import logging
from datetime import datetime, timezone
from typing import (Any, Dict, Generic, NamedTuple, Optional, Sequence, Type,
                    TypeVar)

import pydantic
import requests

from models.base import LedgerRecord, RecordCreate, RecordUpdate
from services.supabase_client import (Condition, SupabaseClient, SupabaseError,
                                     get_client)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=LedgerRecord)

# Errors the data-access layer reports instead of raising. A ValidationError
# means a stored row the record model cannot read.
EXPECTED_ERRORS = (SupabaseError, requests.RequestException, pydantic.ValidationError)


class Result(NamedTuple):
    """A payload or an error message, never both."""

    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def not_found(resource: str, record_id: str) -> Result:
    return Result(error=f"{resource} '{record_id}' not found")


class RowStore(Generic[T]):
    """
    CRUD operations on one table, always scoped by ``user_id``.

    :param model: Record model mapping rows to application objects.
    :param table: Table name.
    :param order: PostgREST order terms giving lists a deterministic order.
    :param resource: Human readable entity name used in messages.
    :param stamp_updated_at: Whether updates set ``updated_at``.
    """

    def __init__(
        self,
        model: Type[T],
        table: str,
        order: Sequence[str] = ("name.asc",),
        resource: Optional[str] = None,
        stamp_updated_at: bool = False,
        client: Optional[SupabaseClient] = None,
    ):
        self.model = model
        self.table = table
        self.order = tuple(order)
        self.resource = resource or model.__name__
        self.stamp_updated_at = stamp_updated_at
        self._client = client

    @property
    def client(self) -> SupabaseClient:
        # Resolved per call so importing a handler needs no configuration
        return self._client or get_client()

    def _log_failure(self, action: str, user_id: str, err: Exception) -> None:
        logger.error(
            "Couldn't %s %s for user %s in table %s. Error: %s: %s",
            action,
            self.resource,
            user_id,
            self.table,
            type(err).__name__,
            err,
        )

    def list(
        self,
        user_id: str,
        filters: Optional[Dict[str, Any]] = None,
        conditions: Sequence[Condition] = (),
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Result:
        """All of the user's rows, in the store's order."""
        try:
            rows = self.client.select(
                self.table,
                filters={**(filters or {}), "user_id": user_id},
                conditions=conditions,
                order=self.order,
                limit=limit,
                offset=offset,
            )
            return Result(data=[self.model.from_row(row) for row in rows])
        except EXPECTED_ERRORS as err:
            self._log_failure("list", user_id, err)
            return Result(error=str(err))

    def get(self, user_id: str, record_id: str) -> Result:
        try:
            rows = self.client.select(
                self.table, filters={"id": record_id, "user_id": user_id}, limit=1
            )
            if not rows:
                return not_found(self.resource, record_id)
            return Result(data=self.model.from_row(rows[0]))
        except EXPECTED_ERRORS as err:
            self._log_failure("get", user_id, err)
            return Result(error=str(err))

    def create(self, user_id: str, payload: RecordCreate) -> Result:
        try:
            row = self.client.insert(self.table, payload.to_row(user_id))
            logger.info("Created %s %s for user %s", self.resource, row["id"], user_id)
            return Result(data=self.model.from_row(row))
        except EXPECTED_ERRORS as err:
            self._log_failure("create", user_id, err)
            return Result(error=str(err))

    def update(self, user_id: str, record_id: str, changes: RecordUpdate) -> Result:
        """
        Write only the fields present in ``changes``.

        An empty update writes nothing and returns the current row.
        """
        if changes.is_empty:
            return self.get(user_id, record_id)

        values = changes.to_row()

        if self.stamp_updated_at:
            values["updated_at"] = datetime.now(timezone.utc).isoformat()

        try:
            rows = self.client.update(
                self.table, values, filters={"id": record_id, "user_id": user_id}
            )
            if not rows:
                return not_found(self.resource, record_id)
            return Result(data=self.model.from_row(rows[0]))
        except EXPECTED_ERRORS as err:
            self._log_failure("update", user_id, err)
            return Result(error=str(err))

    def delete(self, user_id: str, record_id: str) -> Result:
        try:
            rows = self.client.delete(
                self.table, filters={"id": record_id, "user_id": user_id}
            )
        except EXPECTED_ERRORS as err:
            self._log_failure("delete", user_id, err)
            return Result(error=str(err))

        if not rows:
            return not_found(self.resource, record_id)
        return Result(data=True)
