"""Serialized settings records stored in the database."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OptionRecord(SQLModel, table=True):
    """One JSON-encoded settings mapping per option id."""

    __tablename__: ClassVar[str] = "option_record"

    option_id: str = Field(primary_key=True, max_length=191)
    value: str = Field(default="{}", nullable=False)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)
