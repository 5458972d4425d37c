"""Settings page built from a declarative sections/fields configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from markupsafe import Markup

from .config import validate_settings_config
from .domain.repositories import OptionStore
from .fields import (
    FieldDefinition,
    FieldRenderer,
    Sanitizer,
    ValueResolver,
    build_registry,
    normalize,
    prepare_config,
    prepare_sections,
)
from .fields.markup import PAGE_TAGS, kses
from .fields.registry import VARIANT_PLUGIN
from .hooks import HookRegistry
from .logging_config import get_logger

logger = get_logger(__name__)

_PREFIXES = {"plugin": "sp", "options": "spo"}


@dataclass(frozen=True)
class SectionView:
    key: str
    title: str
    description: Markup
    has_fields: bool


@dataclass(frozen=True)
class FieldRow:
    id: str
    section: str
    label: Markup
    html: Markup
    row_class: str


class SettingsPage:
    """One option record's settings: resolution, rendering, sanitization, storage.

    The configuration is normalized once at construction; the store is injected
    so the page can run against any key-value backend.
    """

    def __init__(
        self,
        config: Mapping[str, Any],
        store: OptionStore,
        hooks: Optional[HookRegistry] = None,
        default_variant: str = VARIANT_PLUGIN,
    ) -> None:
        self.hooks = hooks or HookRegistry()
        self.store = store
        self.config = prepare_config(config, self.hooks)
        self.variant = validate_settings_config(self.config, default_variant)
        self.option_id: str = self.config["option_id"]
        self.page_title = str(self.config.get("page_title") or "Settings")
        self.menu_title = str(self.config.get("menu_title") or self.page_title)
        self.prefix = str(self.config.get("css_prefix") or _PREFIXES[self.variant])

        self.sections = prepare_sections(self.config, self.hooks)
        self.fields = normalize(self.sections, self.hooks)
        self.registry = build_registry(self.variant)
        self.resolver = ValueResolver(self.option_id, store, self.fields, self.hooks)
        self.renderer = FieldRenderer(self.option_id, self.resolver, self.registry, self.hooks, self.prefix)
        self.sanitizer = Sanitizer(
            self.fields,
            self.resolver,
            self.registry,
            self.hooks,
            unslash_input=bool(self.config.get("unslash", True)),
        )
        logger.debug(
            "Prepared settings page %s with %d sections and %d fields",
            self.option_id,
            len(self.sections),
            len(self.fields),
        )

    # -- values -----------------------------------------------------------------

    def get(self, field_id: str) -> str:
        """Effective value of ``field_id`` considering defaults."""

        return self.resolver.resolve(field_id)

    def values(self) -> dict[str, str]:
        """Effective values of every configured field, from one store read."""

        record = self.resolver.record()
        return {field_id: self.resolver.resolve(field_id, record) for field_id in self.fields}

    def update(self, field_id: str, value: Any) -> None:
        """Set a single key in the stored record, leaving the others untouched."""

        record = self.resolver.record()
        record[field_id] = value
        self.store.set(self.option_id, record)

    def reset(self) -> None:
        """Forget every stored value so all fields fall back to their defaults."""

        self.store.delete(self.option_id)

    # -- submission -------------------------------------------------------------

    def sanitize(self, submitted: Mapping[str, Any]) -> dict[str, str]:
        return self.sanitizer.sanitize(submitted)

    def save(self, submitted: Mapping[str, Any]) -> dict[str, str]:
        """Sanitize ``submitted`` and store it as the whole record."""

        cleaned = self.sanitize(submitted)
        self.store.set(self.option_id, cleaned)
        return cleaned

    def after_save(self) -> None:
        self.hooks.do_action("after_save", self)

    def extract_submission(self, form: Any) -> dict[str, Any]:
        """Collect ``<option_id>[<field_id>]`` entries from posted form data.

        When a name repeats (a checkbox's hidden fallback followed by the box
        itself) the last value wins.
        """

        pattern = re.compile(rf"^{re.escape(self.option_id)}\[(.+)\]$")
        if hasattr(form, "lists"):
            items: Iterable[tuple[str, Any]] = ((key, values[-1]) for key, values in form.lists() if values)
        else:
            items = form.items()
        submitted: dict[str, Any] = {}
        for key, value in items:
            match = pattern.match(key)
            if match:
                submitted[match.group(1)] = value
        return submitted

    # -- rendering --------------------------------------------------------------

    def render_field(self, field_id: str, record: Optional[Mapping[str, Any]] = None) -> Markup:
        definition = self.fields.get(field_id)
        if definition is None:
            return Markup("")
        return self.renderer.render(definition, record)

    def render_rows(self) -> list[FieldRow]:
        """Label and markup for each field in configuration order."""

        record = self.resolver.record()
        return [self._row(definition, record) for definition in self.fields.values()]

    def _row(self, definition: FieldDefinition, record: Mapping[str, Any]) -> FieldRow:
        return FieldRow(
            id=definition.id,
            section=definition.section,
            label=self.renderer.label(definition),
            html=self.renderer.render(definition, record),
            row_class=f"{self.prefix}-field-{definition.id}",
        )

    def description(self) -> Markup:
        return kses(str(self.config.get("desc") or ""), PAGE_TAGS)

    def section_views(self) -> list[SectionView]:
        populated = {definition.section for definition in self.fields.values()}
        return [
            SectionView(
                key=key,
                title=str(section.get("title") or key),
                description=kses(str(section.get("desc") or ""), PAGE_TAGS),
                has_fields=key in populated,
            )
            for key, section in self.sections.items()
        ]

    def is_settings_page(self, current: bool) -> bool:
        """Whether page assets should load for the current request."""

        return bool(self.hooks.apply_filters("is_settings_page", current))
