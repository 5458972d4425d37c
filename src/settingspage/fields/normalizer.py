"""Flatten sectioned settings configuration into a field table."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional

from ..hooks import HookRegistry
from ..logging_config import get_logger
from .registry import is_known_type
from .types import FieldDefinition

logger = get_logger(__name__)

FieldTable = Dict[str, FieldDefinition]


def prepare_config(config: Mapping[str, Any], hooks: Optional[HookRegistry] = None) -> dict[str, Any]:
    """Return the configuration after the ``config`` filter."""

    hooks = hooks or HookRegistry()
    return dict(hooks.apply_filters("config", dict(config)))


def prepare_sections(config: Mapping[str, Any], hooks: Optional[HookRegistry] = None) -> dict[str, dict[str, Any]]:
    """Return the ordered, filtered section mapping of ``config``."""

    hooks = hooks or HookRegistry()
    sections = hooks.apply_filters("sections", dict(config.get("sections") or {}))
    prepared: dict[str, dict[str, Any]] = {}
    for section_key, section in sections.items():
        section = hooks.apply_filters(f"section-{section_key}", dict(section or {}))
        prepared[str(section_key)] = section
    return prepared


def normalize(sections: Mapping[str, Mapping[str, Any]], hooks: Optional[HookRegistry] = None) -> FieldTable:
    """Flatten ``sections`` into field id -> definition, stamping id and section.

    Sections and fields keep their declared order. A field id repeated in a later
    section replaces the earlier definition but keeps its original position.
    """

    hooks = hooks or HookRegistry()
    table: FieldTable = {}
    for section_key, section in sections.items():
        fields = dict(section.get("fields") or {})
        fields = hooks.apply_filters("fields", fields, section_key)
        fields = hooks.apply_filters(f"fields-{section_key}", fields)

        for field_id, raw in fields.items():
            definition = FieldDefinition.from_config(field_id, section_key, raw)
            if definition.id in table:
                logger.warning(
                    "Field id %r in section %r overrides the definition from section %r",
                    definition.id,
                    section_key,
                    table[definition.id].section,
                )
            if definition.type and not is_known_type(definition.type):
                logger.info("Field %r has unrecognized type %r", definition.id, definition.type)
            table[definition.id] = definition
    return table
