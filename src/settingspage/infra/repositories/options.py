"""Option stores backed by SQLModel or process memory."""

from __future__ import annotations

import copy
import json
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.options import OptionRecord

logger = get_logger(__name__)


class OptionStoreError(ValueError):
    """Raised when a stored record cannot be decoded into a mapping."""


def decode_record(option_id: str, raw: str) -> dict[str, Any]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise OptionStoreError(f"Stored record {option_id!r} is not valid JSON") from exc
    if not isinstance(data, dict):
        raise OptionStoreError(f"Stored record {option_id!r} is not a JSON object")
    return data


class SQLModelOptionStore:
    """SQLModel-based option store."""

    def __init__(self, session_factory: Callable[[], AbstractContextManager[Session]]):
        self.session_factory = session_factory

    def get(self, option_id: str) -> Optional[dict[str, Any]]:
        with self.session_factory() as session:
            row = session.exec(select(OptionRecord).where(OptionRecord.option_id == option_id)).first()
            if row is None:
                return None
            raw = row.value
        try:
            return decode_record(option_id, raw)
        except OptionStoreError:
            logger.exception("Ignoring undecodable settings record", extra={"option_id": option_id})
            return None

    def set(self, option_id: str, record: Mapping[str, Any]) -> bool:
        payload = json.dumps(dict(record), ensure_ascii=False)
        with self.session_factory() as session:
            row = session.exec(select(OptionRecord).where(OptionRecord.option_id == option_id)).first()
            if row:
                row.value = payload
                row.updated_at = datetime.now(timezone.utc)
            else:
                row = OptionRecord(option_id=option_id, value=payload)
            session.add(row)
            session.commit()
        logger.info("Saved settings record", extra={"option_id": option_id, "keys": len(record)})
        return True

    def delete(self, option_id: str) -> None:
        with self.session_factory() as session:
            row = session.exec(select(OptionRecord).where(OptionRecord.option_id == option_id)).first()
            if row:
                session.delete(row)
                session.commit()
                logger.info("Deleted settings record", extra={"option_id": option_id})


class InMemoryOptionStore:
    """Dictionary-backed option store for tests and embedding."""

    def __init__(self, records: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        self._records: dict[str, dict[str, Any]] = {
            key: dict(value) for key, value in (records or {}).items()
        }
        self.writes = 0

    def get(self, option_id: str) -> Optional[dict[str, Any]]:
        record = self._records.get(option_id)
        return copy.deepcopy(record) if record is not None else None

    def set(self, option_id: str, record: Mapping[str, Any]) -> bool:
        self._records[option_id] = copy.deepcopy(dict(record))
        self.writes += 1
        return True

    def delete(self, option_id: str) -> None:
        self._records.pop(option_id, None)


__all__ = ["InMemoryOptionStore", "OptionStoreError", "SQLModelOptionStore", "decode_record"]
