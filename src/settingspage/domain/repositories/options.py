"""Option store protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol


class OptionStore(Protocol):
    """Key-value store holding one serialized settings record per option id."""

    def get(self, option_id: str) -> Optional[dict[str, Any]]:
        """Return the stored record for ``option_id`` or None if never saved."""
        ...

    def set(self, option_id: str, record: Mapping[str, Any]) -> bool:
        """Replace the whole record for ``option_id``."""
        ...

    def delete(self, option_id: str) -> None:
        """Remove the record for ``option_id`` if present."""
        ...
