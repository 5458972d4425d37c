"""Logging for the settings page: console output plus a rotating JSON log file."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .config import BaseConfig

ROOT_LOGGER_NAME = "settingspage"
LOG_FILENAME = "settingspage.log"

# Context keys that get a top-level slot in JSON records instead of "extra".
CONTEXT_KEYS = ("option_id", "field_id")

_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with settings context lifted to the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        extra = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        for key in CONTEXT_KEYS:
            if key in extra:
                payload[key] = extra.pop(key)
        if extra:
            payload["extra"] = extra

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(payload, default=str)


def _console_level(config: BaseConfig) -> int:
    if config.LOG_LEVEL:
        return logging.getLevelName(config.LOG_LEVEL)
    return logging.INFO if config.DEV_MODE else logging.WARNING


def _console_handler(config: BaseConfig) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(_console_level(config))
    if config.DEV_MODE:
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)-8s %(name)s: %(message)s", "%H:%M:%S"))
    else:
        handler.setFormatter(JSONFormatter())
    return handler


def _file_handler(config: BaseConfig, log_file: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach console and file handlers to the ``settingspage`` logger.

    Safe to call once per app factory run; previous handlers are closed and
    replaced. Log files live in ``<DATA_DIR>/logs``.
    """

    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / LOG_FILENAME

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(min(logging.INFO, _console_level(config)))
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    logger.addHandler(_console_handler(config))
    logger.addHandler(_file_handler(config, log_file))

    logger.info("Logging initialized", extra={"dev_mode": config.DEV_MODE, "log_file": str(log_file)})
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return ``name`` as a child of the ``settingspage`` logger."""

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
