"""SQLModel table exports."""

from .options import OptionRecord

__all__ = ["OptionRecord"]
