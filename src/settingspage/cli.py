"""Flask CLI commands for the settings page."""

from __future__ import annotations

import json

import click
from flask import current_app


def _page():
    return current_app.extensions["settingspage"]


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("settings-get")
    @click.argument("field_id")
    def settings_get(field_id: str) -> None:
        """Print the effective value of one setting."""

        page = _page()
        if field_id not in page.fields:
            raise click.BadParameter(f"Unknown setting {field_id!r}", param_hint="FIELD_ID")
        click.echo(page.get(field_id))

    @app.cli.command("settings-set")
    @click.argument("field_id")
    @click.argument("value")
    def settings_set(field_id: str, value: str) -> None:
        """Sanitize VALUE and store it for one setting."""

        page = _page()
        if field_id not in page.fields:
            raise click.BadParameter(f"Unknown setting {field_id!r}", param_hint="FIELD_ID")
        cleaned = page.sanitize({field_id: value})[field_id]
        page.update(field_id, cleaned)
        click.echo(f"{field_id} = {cleaned}")

    @app.cli.command("settings-dump")
    def settings_dump() -> None:
        """Print every effective setting as JSON."""

        click.echo(json.dumps(_page().values(), indent=2, sort_keys=True))

    @app.cli.command("settings-reset")
    @click.confirmation_option(prompt="Restore every setting to its default?")
    def settings_reset() -> None:
        """Delete the stored record so defaults apply."""

        _page().reset()
        click.echo("Settings restored to defaults.")
