"""Shared base classes for Pocket Ledger records.

Python attribute names match the snake_case storage columns. The camelCase
aliases are the application-facing names used in API payloads. ``from_row`` and
``to_row`` translate to and from the storage shape, ``to_api`` to the
application shape.
"""

from datetime import date
from typing import Any, ClassVar, Dict, FrozenSet, Optional

import pydantic
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LedgerModel(BaseModel):
    """Base model accepting both camelCase and snake_case input."""

    # Some tables use bigint identity keys; ids and foreign keys are strings here
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True
    )

    def to_api(self) -> Dict[str, Any]:
        """Application-shaped (camelCase) representation."""
        return self.model_dump(by_alias=True)


class LedgerRecord(LedgerModel):
    """A persisted row owned by exactly one user."""

    id: str
    user_id: str

    @classmethod
    def from_row(cls, row: Dict[str, Any]):
        """Create a record from a storage row."""
        if not row:
            return None
        return cls.model_validate(row)

    def to_row(self) -> Dict[str, Any]:
        """Storage (snake_case) representation."""
        return self.model_dump(mode="json")


class RecordCreate(LedgerModel):
    """Input for an insert. Server-managed fields are never accepted."""

    def to_row(self, user_id: str) -> Dict[str, Any]:
        row = self.model_dump(mode="json")
        row["user_id"] = user_id
        return row


class RecordUpdate(LedgerModel):
    """
    Partial update input.

    Only fields present in the input are written. Fields listed in
    ``non_nullable`` may be omitted but not explicitly set to null.
    """

    non_nullable: ClassVar[FrozenSet[str]] = frozenset()

    @pydantic.model_validator(mode="after")
    def reject_null_required_columns(self):
        nulls = sorted(
            name
            for name in self.model_fields_set & self.non_nullable
            if getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)

    @property
    def is_empty(self) -> bool:
        return not self.model_fields_set


def optional_str(value: Optional[str]) -> Optional[str]:
    """Blank strings from form inputs are stored as null."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class DatePeriod(LedgerModel):
    """Inclusive ``[start_date, end_date]`` range."""

    start_date: date
    end_date: date

    @pydantic.model_validator(mode="after")
    def ordered(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self
