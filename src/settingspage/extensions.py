"""Database and extension wiring for the settings page."""

from __future__ import annotations

from flask import Flask
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from . import models  # noqa: F401  # ensure models registered with SQLModel metadata
from .config import BaseConfig


def init_db(app: Flask) -> Engine:
    """Create the SQLModel engine from app configuration and ensure tables exist."""

    config: BaseConfig = app.config["SETTINGSPAGE_CONFIG"]
    engine_options = app.config.get("SQLALCHEMY_ENGINE_OPTIONS", {})
    engine = create_engine(config.DATABASE_URL, **engine_options)
    SQLModel.metadata.create_all(engine)
    app.extensions["settingspage.engine"] = engine
    return engine
