"""Repository protocol definitions for domain layer."""

from .options import OptionStore

__all__ = ["OptionStore"]
