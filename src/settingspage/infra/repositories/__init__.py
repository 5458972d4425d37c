"""Concrete option store implementations."""

from .options import InMemoryOptionStore, OptionStoreError, SQLModelOptionStore

__all__ = ["InMemoryOptionStore", "OptionStoreError", "SQLModelOptionStore"]
