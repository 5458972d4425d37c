"""Field markup rendering."""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from markupsafe import Markup, escape

from ..hooks import HookRegistry
from ..logging_config import get_logger
from .markup import DESCRIPTION_TAGS, LABEL_TAGS, kses
from .registry import FieldTypeRegistry, build_registry
from .resolver import ValueResolver
from .types import FieldDefinition, RenderContext

logger = get_logger(__name__)

_ATTRIBUTE_NAME = re.compile(r"^[A-Za-z_:][A-Za-z0-9_.:-]*$")


class FieldRenderer:
    """Produce the markup for one field at a time.

    Every field is wrapped in a container carrying its section marker class so
    the browser can show one section at a time.
    """

    def __init__(
        self,
        option_id: str,
        resolver: ValueResolver,
        registry: Optional[FieldTypeRegistry] = None,
        hooks: Optional[HookRegistry] = None,
        prefix: str = "sp",
    ) -> None:
        self.option_id = option_id
        self.resolver = resolver
        self.registry = registry or build_registry()
        self.hooks = hooks or HookRegistry()
        self.prefix = prefix

    def field_name(self, field_id: str) -> str:
        return f"{self.option_id}[{field_id}]"

    def element_id(self, field_id: str) -> str:
        return f"{self.prefix}-field-{escape(field_id)}"

    def classes(self, definition: FieldDefinition) -> str:
        classes = [f"{self.prefix}-field", f"{self.prefix}-{definition.type}"]
        handler = self.registry.get(definition.type)
        if handler is not None and handler.default_class:
            classes.append(handler.default_class)
        if definition.class_:
            classes.append(definition.class_)
        return " ".join(classes)

    def common_attributes(self, definition: FieldDefinition, classes: str) -> Markup:
        attributes = f'name="{escape(self.field_name(definition.id))}" class="{escape(classes)}"'
        for name, value in definition.attributes.items():
            if not _ATTRIBUTE_NAME.match(name):
                logger.warning("Skipping invalid attribute name %r on field %r", name, definition.id)
                continue
            attributes += f' {name}="{escape(value)}"'
        return Markup(attributes)

    def label(self, definition: FieldDefinition) -> Markup:
        """Field label markup: the name plus an optional ``after_name`` note."""

        if not definition.name:
            return Markup("")
        name = definition.name
        if definition.after_name:
            name += f' <span class="{self.prefix}-after-name">{definition.after_name}</span>'
        return kses(name, LABEL_TAGS)

    def context(self, definition: FieldDefinition, record: Optional[Mapping[str, Any]] = None) -> RenderContext:
        classes = self.classes(definition)
        return RenderContext(
            field_id=definition.id,
            value=self.resolver.resolve(definition.id, record),
            classes=classes,
            common_attributes=self.common_attributes(definition, classes),
            element_id=self.element_id(definition.id),
            prefix=self.prefix,
        )

    def control(self, definition: FieldDefinition, ctx: RenderContext) -> Markup:
        if definition.custom is not None:
            html = definition.custom.render(definition, ctx)
            if html is not NotImplemented:
                return Markup(html if html is not None else "")
        return self.registry.handler_for(definition.type).render(definition, ctx)

    def render(self, definition: FieldDefinition, record: Optional[Mapping[str, Any]] = None) -> Markup:
        """Render ``definition`` against ``record`` (read from the store when omitted)."""

        ctx = self.context(definition, record)
        html = Markup(self.hooks.apply_filters("field_content_after", self.control(definition, ctx), definition))

        if definition.desc:
            html += Markup('<p class="description">') + kses(definition.desc, DESCRIPTION_TAGS) + Markup("</p>")

        section = escape(definition.section)
        html = Markup(f'<div class="{self.prefix}-section {self.prefix}-section-{section}">{html}</div>')
        return Markup(self.hooks.apply_filters("field_content", html, definition))
