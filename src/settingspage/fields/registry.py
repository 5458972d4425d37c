"""Field type registry pairing each type tag with a renderer and a sanitizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional, Union

from markupsafe import Markup

from . import cleaners, controls
from .cleaners import SanitizeContext
from .types import FieldDefinition, FieldType, RenderContext

Renderer = Callable[[FieldDefinition, RenderContext], Markup]
Sanitizer = Callable[[str, FieldDefinition, SanitizeContext], str]

VARIANT_PLUGIN = "plugin"
VARIANT_OPTIONS = "options"


@dataclass(frozen=True)
class FieldHandler:
    render: Renderer
    sanitize: Sanitizer
    default_class: str = ""


FALLBACK_HANDLER = FieldHandler(render=controls.render_nothing, sanitize=cleaners.clean_passthrough)


class FieldTypeRegistry:
    """Type tag -> handler lookup used by the renderer and the sanitizer."""

    def __init__(self) -> None:
        self._handlers: Dict[FieldType, FieldHandler] = {}

    def register(self, field_type: FieldType, handler: FieldHandler) -> None:
        self._handlers[field_type] = handler

    def get(self, tag: Union[str, FieldType, None]) -> Optional[FieldHandler]:
        field_type = tag if isinstance(tag, FieldType) else FieldType.parse(tag)
        if field_type is None:
            return None
        return self._handlers.get(field_type)

    def handler_for(self, tag: Union[str, FieldType, None]) -> FieldHandler:
        """Return the handler for ``tag``, or one that renders and stores nothing special."""

        return self.get(tag) or FALLBACK_HANDLER

    def __contains__(self, tag: object) -> bool:
        return self.get(tag) is not None  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[FieldType]:
        return iter(self._handlers)


def build_registry(variant: str = VARIANT_PLUGIN) -> FieldTypeRegistry:
    """Return the built-in registry for a variant.

    The ``options`` variant predates the url, upload and content types and
    integer-casts numbers; the ``plugin`` variant falls back to the default for
    non-numeric input.
    """

    registry = FieldTypeRegistry()
    registry.register(FieldType.TEXT, FieldHandler(controls.render_text, cleaners.clean_text, "regular-text"))
    registry.register(FieldType.TEXTAREA, FieldHandler(controls.render_textarea, cleaners.clean_text))
    registry.register(FieldType.CHECKBOX, FieldHandler(controls.render_checkbox, cleaners.clean_checkbox))
    registry.register(FieldType.RADIO, FieldHandler(controls.render_radio, cleaners.clean_choice))
    registry.register(FieldType.SELECT, FieldHandler(controls.render_select, cleaners.clean_choice))

    if variant == VARIANT_OPTIONS:
        registry.register(
            FieldType.NUMBER, FieldHandler(controls.render_number, cleaners.clean_number_cast, "small-text")
        )
        return registry

    registry.register(
        FieldType.NUMBER, FieldHandler(controls.render_number, cleaners.clean_number_or_default, "small-text")
    )
    registry.register(FieldType.URL, FieldHandler(controls.render_text, cleaners.clean_url, "regular-text"))
    registry.register(FieldType.UPLOAD, FieldHandler(controls.render_upload, cleaners.clean_url, "regular-text"))
    registry.register(FieldType.CONTENT, FieldHandler(controls.render_content, cleaners.clean_nothing))
    return registry


def is_known_type(tag: Union[str, FieldType, None]) -> bool:
    return FieldType.parse(tag) is not None
