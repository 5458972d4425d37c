"""Application configuration objects and helpers."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

from dotenv import load_dotenv

load_dotenv()

VARIANTS = ("plugin", "options")


class ConfigurationError(ValueError):
    """Raised when application or settings configuration is unusable."""


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}.") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "SettingsPage"
    DB_FILENAME = "settingspage.db"
    CONFIG_FILE_ENV = "SETTINGSPAGE_CONFIG_FILE"

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("SETTINGSPAGE_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("SETTINGSPAGE_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("SETTINGSPAGE_DATABASE_URL", self._build_sqlite_url())
        self.DEFAULT_VARIANT = os.getenv("SETTINGSPAGE_VARIANT", "plugin").strip().lower()
        self.SETTINGS_CONFIG_FILE = os.getenv(self.CONFIG_FILE_ENV)
        self.LOG_LEVEL = os.getenv("SETTINGSPAGE_LOG_LEVEL", "").strip().upper() or None
        self.LOG_MAX_BYTES = _env_int("SETTINGSPAGE_LOG_MAX_BYTES", 5 * 1024 * 1024)
        self.LOG_BACKUP_COUNT = _env_int("SETTINGSPAGE_LOG_BACKUP_COUNT", 3)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ConfigurationError("SETTINGSPAGE_SECRET_KEY must be set in non-dev mode.")
        if self.DEFAULT_VARIANT not in VARIANTS:
            raise ConfigurationError(
                f"SETTINGSPAGE_VARIANT must be one of {', '.join(VARIANTS)}, "
                f"got {self.DEFAULT_VARIANT!r}."
            )
        if self.LOG_LEVEL is not None and not isinstance(logging.getLevelName(self.LOG_LEVEL), int):
            raise ConfigurationError(f"SETTINGSPAGE_LOG_LEVEL {self.LOG_LEVEL!r} is not a logging level.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("SETTINGSPAGE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}

    def load_settings_config(self) -> dict[str, Any] | None:
        """Read the JSON settings configuration named by the environment, if any."""

        if not self.SETTINGS_CONFIG_FILE:
            return None
        path = Path(self.SETTINGS_CONFIG_FILE).expanduser()
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except OSError as exc:
            raise ConfigurationError(f"Unable to read settings configuration {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Settings configuration {path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings configuration {path} must be a JSON object.")
        return data


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


def validate_settings_config(config: Mapping[str, Any], default_variant: str = "plugin") -> str:
    """Check the minimal shape of a settings configuration and return its variant."""

    option_id = config.get("option_id")
    if not option_id or not isinstance(option_id, str):
        raise ConfigurationError("Settings configuration requires a non-empty 'option_id'.")
    sections = config.get("sections", {})
    if not isinstance(sections, Mapping):
        raise ConfigurationError("'sections' must map section keys to section definitions.")
    variant = str(config.get("variant") or default_variant).strip().lower()
    if variant not in VARIANTS:
        raise ConfigurationError(
            f"Unknown settings variant {variant!r}; expected one of {', '.join(VARIANTS)}."
        )
    return variant
