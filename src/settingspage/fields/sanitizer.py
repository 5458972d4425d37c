"""Sanitization of submitted settings before they are stored."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..hooks import HookRegistry
from ..logging_config import get_logger
from .cleaners import SanitizeContext
from .markup import unslash
from .registry import FieldTypeRegistry, build_registry
from .resolver import ValueResolver
from .types import FieldDefinition, FieldType, to_setting_str

logger = get_logger(__name__)


class Sanitizer:
    """Clean a whole submitted mapping, one output entry per submitted key."""

    def __init__(
        self,
        fields: Mapping[str, FieldDefinition],
        resolver: ValueResolver,
        registry: Optional[FieldTypeRegistry] = None,
        hooks: Optional[HookRegistry] = None,
        unslash_input: bool = True,
    ) -> None:
        self.fields = fields
        self.resolver = resolver
        self.registry = registry or build_registry()
        self.hooks = hooks or HookRegistry()
        self.unslash_input = unslash_input

    def sanitize(self, submitted: Mapping[str, Any]) -> dict[str, str]:
        record: Optional[dict[str, Any]] = None

        def current_value(field_id: str) -> str:
            nonlocal record
            if record is None:
                record = self.resolver.record()
            return self.resolver.resolve(field_id, record)

        ctx = SanitizeContext(current_value=current_value)
        output: dict[str, str] = {}
        for key, raw in submitted.items():
            key = str(key)
            definition = self.fields.get(key)
            if definition is None:
                # The field may belong to an extension disabled after the form rendered.
                logger.info("Unknown setting %r submitted; storing empty value", key)
                output[key] = ""
                continue
            output[key] = self.sanitize_value(definition, raw, ctx)

        return dict(self.hooks.apply_filters("sanitize", output, dict(submitted)))

    def sanitize_value(self, definition: FieldDefinition, raw: Any, ctx: SanitizeContext) -> str:
        submitted = to_setting_str(raw).strip()
        if self.unslash_input:
            submitted = unslash(submitted)
        value = self.registry.handler_for(definition.type).sanitize(submitted, definition, ctx)

        if definition.kind in (FieldType.RADIO, FieldType.SELECT) and value != submitted:
            logger.info("Rejected choice %r for %r; keeping current value", submitted, definition.id)

        if definition.custom is not None:
            custom = definition.custom.sanitize(value, definition)
            if custom is not NotImplemented:
                value = to_setting_str(custom)

        return value.strip()
