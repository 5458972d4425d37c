"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone

import pytest

from settingspage.config import BaseConfig, ConfigurationError
from settingspage.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture()
def base_config(tmp_path, monkeypatch):
    monkeypatch.setenv("SETTINGSPAGE_DATA_DIR", str(tmp_path))
    return BaseConfig()


def test_json_formatter_includes_extra_fields():
    formatter = JSONFormatter()
    record = logging.LogRecord(
        name="settingspage.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=7,
        msg="Saved %s",
        args=("demo",),
        exc_info=None,
    )
    record.option_id = "demo"
    record.keys = 3

    log_data = json.loads(formatter.format(record))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "settingspage.test"
    assert log_data["message"] == "Saved demo"
    assert log_data["location"].endswith(":7")
    assert log_data["option_id"] == "demo"
    assert log_data["extra"] == {"keys": 3}
    assert log_data["timestamp"].startswith(str(datetime.fromtimestamp(record.created, timezone.utc).year))


def test_json_formatter_with_exception():
    formatter = JSONFormatter()
    try:
        raise ValueError("bad record")
    except ValueError:
        exc_info = sys.exc_info()

    record = logging.LogRecord(
        name="settingspage.test",
        level=logging.ERROR,
        pathname="test.py",
        lineno=1,
        msg="Failed",
        args=(),
        exc_info=exc_info,
    )

    log_data = json.loads(formatter.format(record))

    assert log_data["exception"]["type"] == "ValueError"
    assert "bad record" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"]


def test_setup_logging_writes_json_file(base_config, tmp_path):
    logger = setup_logging(base_config)

    assert logger.name == "settingspage"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 2

    logger.warning("Settings record rejected")
    for handler in logger.handlers:
        handler.flush()

    log_file = tmp_path / "logs" / "settingspage.log"
    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    messages = [json.loads(line)["message"] for line in lines]
    assert "Logging initialized" in messages
    assert "Settings record rejected" in messages


def test_setup_logging_twice_does_not_duplicate_handlers(base_config):
    setup_logging(base_config)
    logger = setup_logging(base_config)

    assert len(logger.handlers) == 2


def test_get_logger_namespaces():
    assert get_logger("module1").name == "settingspage.module1"
    assert get_logger("settingspage.fields.sanitizer").name == "settingspage.fields.sanitizer"


@pytest.mark.parametrize("dev_mode", [True, False])
def test_console_level_by_mode(base_config, dev_mode):
    base_config.DEV_MODE = dev_mode

    logger = setup_logging(base_config)
    console = [
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    ]

    assert console[0].level == (logging.INFO if dev_mode else logging.WARNING)


def test_log_level_override_applies_to_console(base_config):
    base_config.LOG_LEVEL = "DEBUG"

    logger = setup_logging(base_config)
    console = [h for h in logger.handlers if not isinstance(h, logging.handlers.RotatingFileHandler)]

    assert console[0].level == logging.DEBUG
    assert logger.level == logging.DEBUG


def test_rotation_limits_come_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("SETTINGSPAGE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SETTINGSPAGE_LOG_MAX_BYTES", "2048")
    monkeypatch.setenv("SETTINGSPAGE_LOG_BACKUP_COUNT", "1")

    logger = setup_logging(BaseConfig())
    file_handler = next(h for h in logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler))

    assert file_handler.maxBytes == 2048
    assert file_handler.backupCount == 1


def test_invalid_log_level_rejected(tmp_path, monkeypatch):
    monkeypatch.setenv("SETTINGSPAGE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SETTINGSPAGE_LOG_LEVEL", "chatty")

    with pytest.raises(ConfigurationError):
        BaseConfig()
