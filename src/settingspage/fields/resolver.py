"""Effective value lookup for configured fields."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..domain.repositories import OptionStore
from ..hooks import HookRegistry
from .types import FieldDefinition, FieldType, is_blank, to_setting_str


def resolve_value(record: Optional[Mapping[str, Any]], definition: Optional[FieldDefinition], field_id: str) -> str:
    """Return the effective value of ``field_id`` given a stored record.

    Absent keys use the configured default. A stored empty value also falls
    back to the default when the field is ``no_empty`` or a radio group.
    """

    default = definition.default if definition is not None else ""
    if not record or field_id not in record:
        return default
    stored = record[field_id]
    if is_blank(stored) and definition is not None:
        if definition.no_empty or definition.kind is FieldType.RADIO:
            return default
    return to_setting_str(stored)


class ValueResolver:
    """Resolves field values against the option store for one option id."""

    def __init__(
        self,
        option_id: str,
        store: OptionStore,
        fields: Mapping[str, FieldDefinition],
        hooks: Optional[HookRegistry] = None,
    ) -> None:
        self.option_id = option_id
        self.store = store
        self.fields = fields
        self.hooks = hooks or HookRegistry()

    def record(self) -> dict[str, Any]:
        return dict(self.store.get(self.option_id) or {})

    def resolve(self, field_id: str, record: Optional[Mapping[str, Any]] = None) -> str:
        """Resolve ``field_id``, reading the store unless ``record`` is given."""

        if record is None:
            record = self.record()
        value = resolve_value(record, self.fields.get(field_id), field_id)
        return self.hooks.apply_filters("get", value, field_id)
