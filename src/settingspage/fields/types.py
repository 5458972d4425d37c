"""Field type tags, field definitions, and custom field strategies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable

from markupsafe import Markup


class FieldType(str, Enum):
    """Built-in field type tags."""

    TEXT = "text"
    URL = "url"
    TEXTAREA = "textarea"
    UPLOAD = "upload"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SELECT = "select"
    NUMBER = "number"
    CONTENT = "content"

    @classmethod
    def parse(cls, tag: Any) -> Optional["FieldType"]:
        """Return the member for ``tag`` or ``None`` when the tag is not built in."""

        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            return None


def to_setting_str(value: Any) -> str:
    """Coerce a configured or stored value to the string form kept in the record."""

    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def is_blank(value: Any) -> bool:
    """Return True for values the option store treats as empty (``""``, ``"0"``, None)."""

    if value is None:
        return True
    if isinstance(value, str):
        return value == "" or value == "0"
    return not value


@dataclass(frozen=True)
class RenderContext:
    """Prepared values handed to renderers (built-in or custom)."""

    field_id: str
    value: str
    classes: str
    common_attributes: Markup
    element_id: str
    prefix: str


@runtime_checkable
class FieldStrategy(Protocol):
    """Caller-supplied behaviour for a field.

    Either method may return ``NotImplemented`` to fall back to the built-in
    behaviour for the field's type.
    """

    def render(self, definition: "FieldDefinition", context: RenderContext) -> Any:
        ...

    def sanitize(self, value: str, definition: "FieldDefinition") -> Any:
        ...


@dataclass(frozen=True)
class CallableStrategy:
    """Adapts plain ``custom_content`` / ``custom_sanitize`` callables to a strategy."""

    render_func: Optional[Callable[..., Any]] = None
    sanitize_func: Optional[Callable[..., Any]] = None

    def render(self, definition: "FieldDefinition", context: RenderContext) -> Any:
        if self.render_func is None:
            return NotImplemented
        return self.render_func(definition, context)

    def sanitize(self, value: str, definition: "FieldDefinition") -> Any:
        if self.sanitize_func is None:
            return NotImplemented
        return self.sanitize_func(value, definition)


def _ordered_str_mapping(raw: Any) -> dict[str, str]:
    if not raw:
        return {}
    if isinstance(raw, Mapping):
        items = raw.items()
    else:
        # Lists of [value, label] pairs keep their order in JSON configs.
        items = ((pair[0], pair[1]) for pair in raw)
    return {to_setting_str(key): to_setting_str(label) for key, label in items}


def _build_strategy(raw: Mapping[str, Any]) -> Optional[FieldStrategy]:
    strategy = raw.get("custom")
    if strategy is not None:
        return strategy
    render_func = raw.get("custom_content")
    sanitize_func = raw.get("custom_sanitize")
    if render_func is None and sanitize_func is None:
        return None
    return CallableStrategy(render_func=render_func, sanitize_func=sanitize_func)


@dataclass(frozen=True)
class FieldDefinition:
    """One configured field, stamped with its id and owning section."""

    id: str
    section: str
    type: str = ""
    name: str = ""
    after_name: str = ""
    default: str = ""
    no_empty: bool = False
    allow_html: bool = False
    options: Mapping[str, str] = field(default_factory=dict)
    attributes: Mapping[str, str] = field(default_factory=dict)
    class_: str = ""
    desc: str = ""
    content: str = ""
    checkbox_label: str = ""
    inline: bool = False
    upload_button: str = ""
    upload_title: str = ""
    upload_type: str = ""
    upload_show_image: str = ""
    custom: Optional[FieldStrategy] = field(default=None, compare=False)

    @property
    def kind(self) -> Optional[FieldType]:
        return FieldType.parse(self.type)

    @classmethod
    def from_config(cls, field_id: str, section: str, raw: Mapping[str, Any] | None) -> "FieldDefinition":
        """Build a definition from one entry of a section's ``fields`` mapping."""

        raw = raw or {}
        return cls(
            id=str(field_id),
            section=str(section),
            type=to_setting_str(raw.get("type")).strip().lower(),
            name=to_setting_str(raw.get("name")),
            after_name=to_setting_str(raw.get("after_name")),
            default=to_setting_str(raw.get("default")),
            no_empty=bool(raw.get("no_empty")),
            allow_html=bool(raw.get("allow_html")),
            options=_ordered_str_mapping(raw.get("options")),
            attributes=_ordered_str_mapping(raw.get("attributes")),
            class_=to_setting_str(raw.get("class")).strip(),
            desc=to_setting_str(raw.get("desc")),
            content=to_setting_str(raw.get("content")),
            checkbox_label=to_setting_str(raw.get("checkbox_label")),
            inline=bool(raw.get("inline")),
            upload_button=to_setting_str(raw.get("upload_button")),
            upload_title=to_setting_str(raw.get("upload_title")),
            upload_type=to_setting_str(raw.get("upload_type")),
            upload_show_image=to_setting_str(raw.get("upload_show_image")),
            custom=_build_strategy(raw),
        )
