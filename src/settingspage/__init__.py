"""Settings page application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Any, Iterable, Mapping, Optional

from flask import Flask
from sqlmodel import Session

from . import cli as _cli
from .config import BaseConfig, ConfigurationError, DevConfig
from .domain.repositories import OptionStore
from .hooks import HookRegistry
from .settings import SettingsPage

_CONFIG_MAP = {
    "development": DevConfig,
    "default": BaseConfig,
}

__all__ = [
    "BaseConfig",
    "ConfigurationError",
    "DevConfig",
    "HookRegistry",
    "SettingsPage",
    "create_app",
]


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    yield "settingspage.blueprints.settings"


def create_app(
    config_name: str | None = None,
    settings_config: Optional[Mapping[str, Any]] = None,
    hooks: Optional[HookRegistry] = None,
    store: Optional[OptionStore] = None,
) -> Flask:
    """Create the Flask application hosting one settings page.

    The settings configuration comes from ``settings_config``, else the JSON
    file named by ``SETTINGSPAGE_CONFIG_FILE``, else the bundled sample.
    """

    app = Flask(__name__, instance_relative_config=True)
    config_cls = _resolve_config(config_name)
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", config_obj.sqlalchemy_engine_options())
    app.config["SETTINGSPAGE_CONFIG"] = config_obj
    app.config.setdefault("SETTINGSPAGE_CAPABILITY", None)

    # Imported lazily so model metadata is only touched when an app is built.
    from .extensions import init_db
    from .infra.repositories import SQLModelOptionStore
    from .logging_config import setup_logging
    from .sample_config import SAMPLE_SETTINGS

    setup_logging(config_obj)
    engine = init_db(app)

    if settings_config is None:
        settings_config = config_obj.load_settings_config() or SAMPLE_SETTINGS
    if store is None:
        store = SQLModelOptionStore(lambda: Session(engine))

    app.extensions["settingspage"] = SettingsPage(
        settings_config,
        store,
        hooks=hooks,
        default_variant=config_obj.DEFAULT_VARIANT,
    )

    _register_blueprints(app)
    _cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)
