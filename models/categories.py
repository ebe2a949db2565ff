"""Transaction category models."""

from datetime import datetime
from typing import ClassVar, FrozenSet, Optional

from pydantic import Field

from models.base import LedgerRecord, RecordCreate, RecordUpdate


class Category(LedgerRecord):
    name: str
    created_at: datetime


class CategoryCreate(RecordCreate):
    name: str = Field(..., min_length=1, max_length=50)


class CategoryUpdate(RecordUpdate):
    non_nullable: ClassVar[FrozenSet[str]] = frozenset({"name"})

    name: Optional[str] = Field(None, min_length=1, max_length=50)
