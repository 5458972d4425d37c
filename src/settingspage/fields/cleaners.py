"""Sanitization rules for each built-in field type."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from .markup import coerce_url, filter_post_markup, strip_all_tags
from .types import FieldDefinition, is_blank

_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class SanitizeContext:
    """What a cleaner may consult besides the submitted value."""

    current_value: Callable[[str], str]


def is_numeric(value: str) -> bool:
    return bool(_NUMERIC.match(value))


def to_int_string(value: str) -> str:
    """Integer-cast a submitted value; anything unparseable becomes ``"0"``."""

    if is_numeric(value):
        try:
            return str(int(float(value)))
        except (OverflowError, ValueError):
            return "0"
    match = _LEADING_INT.match(value)
    return str(int(match.group(1))) if match else "0"


def clean_text(value: str, definition: FieldDefinition, ctx: SanitizeContext) -> str:
    if not definition.allow_html:
        value = strip_all_tags(value).strip()
    # Markup may be allowed, but never executable markup.
    return filter_post_markup(value)


def clean_url(value: str, definition: FieldDefinition, ctx: SanitizeContext) -> str:
    return coerce_url(value)


def clean_checkbox(value: str, definition: FieldDefinition, ctx: SanitizeContext) -> str:
    return "" if is_blank(value) else "1"


def clean_choice(value: str, definition: FieldDefinition, ctx: SanitizeContext) -> str:
    if value in definition.options:
        return value
    return ctx.current_value(definition.id)


def clean_number_or_default(value: str, definition: FieldDefinition, ctx: SanitizeContext) -> str:
    return value if is_numeric(value) else definition.default


def clean_number_cast(value: str, definition: FieldDefinition, ctx: SanitizeContext) -> str:
    return to_int_string(value)


def clean_nothing(value: str, definition: FieldDefinition, ctx: SanitizeContext) -> str:
    return ""


def clean_passthrough(value: str, definition: FieldDefinition, ctx: SanitizeContext) -> str:
    return value
