"""Pytest configuration and shared fixtures for settings page tests.

Provides a demo settings configuration, in-memory and SQLModel option stores,
and a Flask app wired to a temporary SQLite database.
"""

from __future__ import annotations

import copy
import tempfile
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from settingspage import create_app
from settingspage.hooks import HookRegistry
from settingspage.infra.repositories import InMemoryOptionStore
from settingspage.models import OptionRecord  # noqa: F401  # register table metadata
from settingspage.settings import SettingsPage

DEMO_CONFIG = {
    "option_id": "demo",
    "page_title": "Demo Settings",
    "desc": "Configure the <strong>demo</strong> site. <script>alert(1)</script>",
    "sections": {
        "general": {
            "title": "General",
            "desc": "Site basics <em>here</em>.",
            "fields": {
                "site_name": {
                    "name": "Site Name",
                    "type": "text",
                    "default": "My Site",
                },
                "tagline": {
                    "name": "Tagline",
                    "type": "textarea",
                    "allow_html": True,
                    "desc": "Use <strong>bold</strong> <img src=x onerror=alert(1)>text.",
                },
                "homepage": {
                    "name": "Homepage",
                    "type": "url",
                },
            },
        },
        "display": {
            "title": "Display",
            "fields": {
                "theme_color": {
                    "name": "Theme Color",
                    "type": "select",
                    "options": {"red": "Red", "blue": "Blue"},
                    "default": "red",
                },
                "layout": {
                    "name": "Layout",
                    "type": "radio",
                    "options": {"wide": "Wide", "boxed": "Boxed"},
                    "default": "wide",
                    "inline": True,
                },
                "max_items": {
                    "name": "Items",
                    "type": "number",
                    "default": 10,
                    "class": " compact ",
                    "attributes": {"min": "1", "data-note": 'say "hi"'},
                },
                "logo": {
                    "name": "Logo",
                    "type": "upload",
                    "upload_button": "Choose",
                    "upload_title": "Pick a logo",
                    "upload_type": "image",
                    "upload_show_image": "150",
                },
            },
        },
        "notifications": {
            "title": "Notifications",
            "fields": {
                "newsletter": {
                    "name": "Newsletter",
                    "type": "checkbox",
                    "checkbox_label": "Send it",
                },
                "notice": {
                    "type": "content",
                    "content": "<p>Static <b>info</b></p><script>bad()</script>",
                },
            },
        },
        "empty": {"title": "Licenses"},
    },
}


@pytest.fixture()
def demo_config():
    """A fresh copy of the demo configuration for each test."""
    return copy.deepcopy(DEMO_CONFIG)


@pytest.fixture()
def memory_store():
    return InMemoryOptionStore()


@pytest.fixture()
def make_page(demo_config, memory_store):
    """Factory building a SettingsPage over the in-memory store.

    Args:
        record: Optional stored record to seed before building
        config: Optional configuration replacing the demo one
        hooks: Optional HookRegistry
        variant: Optional variant override ("plugin" or "options")
    """

    def factory(record=None, config=None, hooks=None, variant=None):
        cfg = copy.deepcopy(config) if config is not None else demo_config
        if variant is not None:
            cfg["variant"] = variant
        if record is not None:
            memory_store.set(cfg["option_id"], record)
        return SettingsPage(cfg, memory_store, hooks=hooks or HookRegistry())

    return factory


@pytest.fixture()
def db_engine():
    """Create an isolated SQLite database file for each test."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture()
def session_factory(db_engine):
    def factory():
        return Session(db_engine)

    return factory


@pytest.fixture()
def settings_app(tmp_path, monkeypatch: pytest.MonkeyPatch, demo_config):
    monkeypatch.setenv("SETTINGSPAGE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SETTINGSPAGE_DATABASE_URL", f"sqlite:///{tmp_path / 'settings.db'}")
    monkeypatch.delenv("SETTINGSPAGE_CONFIG_FILE", raising=False)
    monkeypatch.delenv("SETTINGSPAGE_VARIANT", raising=False)
    hooks = HookRegistry()
    app = create_app("development", settings_config=demo_config, hooks=hooks)
    app.config.update(TESTING=True)
    app.extensions["test_hooks"] = hooks
    return app


@pytest.fixture()
def settings_client(settings_app):
    with settings_app.test_client() as client:
        yield client
