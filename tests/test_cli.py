"""Tests for the settings CLI commands."""

from __future__ import annotations

import json


def test_set_sanitizes_and_get_reads(settings_app):
    runner = settings_app.test_cli_runner()

    result = runner.invoke(args=["settings-set", "max_items", "abc"])
    assert result.exit_code == 0
    assert "max_items = 10" in result.output

    runner.invoke(args=["settings-set", "site_name", "<b>Acme</b>"])
    result = runner.invoke(args=["settings-get", "site_name"])
    assert result.output.strip() == "Acme"


def test_set_keeps_other_values(settings_app):
    runner = settings_app.test_cli_runner()
    runner.invoke(args=["settings-set", "layout", "boxed"])
    runner.invoke(args=["settings-set", "theme_color", "blue"])

    assert settings_app.extensions["settingspage"].store.get("demo") == {"layout": "boxed", "theme_color": "blue"}


def test_unknown_setting_rejected(settings_app):
    result = settings_app.test_cli_runner().invoke(args=["settings-get", "nope"])

    assert result.exit_code != 0
    assert "Unknown setting" in result.output


def test_dump_and_reset(settings_app):
    runner = settings_app.test_cli_runner()
    runner.invoke(args=["settings-set", "site_name", "Acme"])

    dumped = json.loads(runner.invoke(args=["settings-dump"]).output)
    assert dumped["site_name"] == "Acme"
    assert dumped["theme_color"] == "red"

    result = runner.invoke(args=["settings-reset", "--yes"])
    assert result.exit_code == 0
    assert json.loads(runner.invoke(args=["settings-dump"]).output)["site_name"] == "My Site"
