"""Settings page blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint(
    "settings",
    __name__,
    url_prefix="/settings",
)

from . import routes  # noqa: E402,F401

__all__ = ["bp"]
