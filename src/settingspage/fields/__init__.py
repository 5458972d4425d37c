"""Configuration-driven field rendering and sanitization."""

from .normalizer import FieldTable, normalize, prepare_config, prepare_sections
from .registry import FieldHandler, FieldTypeRegistry, build_registry
from .renderer import FieldRenderer
from .resolver import ValueResolver, resolve_value
from .sanitizer import Sanitizer
from .types import CallableStrategy, FieldDefinition, FieldStrategy, FieldType, RenderContext

__all__ = [
    "CallableStrategy",
    "FieldDefinition",
    "FieldHandler",
    "FieldRenderer",
    "FieldStrategy",
    "FieldTable",
    "FieldType",
    "FieldTypeRegistry",
    "RenderContext",
    "Sanitizer",
    "ValueResolver",
    "build_registry",
    "normalize",
    "prepare_config",
    "prepare_sections",
    "resolve_value",
]
