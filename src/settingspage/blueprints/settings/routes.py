"""Settings page routes."""

from __future__ import annotations

from flask import abort, current_app, flash, jsonify, redirect, render_template, request, url_for

from ...logging_config import get_logger
from ...settings import SettingsPage
from . import bp

logger = get_logger(__name__)


def _page() -> SettingsPage:
    return current_app.extensions["settingspage"]


def _prefers_json_response() -> bool:
    accepts = request.accept_mimetypes
    return request.is_json or accepts["application/json"] > accepts["text/html"]


@bp.before_request
def _require_capability():
    """Reject requests the configured capability check does not allow."""

    capability = current_app.config.get("SETTINGSPAGE_CAPABILITY")
    if capability is not None and not capability(request):
        logger.warning("Settings access denied", extra={"path": request.path})
        abort(403)


@bp.get("/")
def show():
    """Display the tabbed settings form."""

    page = _page()
    updated = bool(request.args.get("settings-updated"))
    if updated:
        page.after_save()

    if _prefers_json_response():
        return jsonify({"option_id": page.option_id, "values": page.values()})

    return render_template(
        "settings/page.html",
        page=page,
        sections=page.section_views(),
        rows=page.render_rows(),
        load_assets=page.is_settings_page(True),
        restored=bool(request.args.get("restored")),
    )


@bp.post("/")
def save():
    """Sanitize and store the submitted settings."""

    page = _page()
    if request.is_json:
        payload = request.get_json(silent=True)
        submitted = payload.get(page.option_id, payload) if isinstance(payload, dict) else None
        if not isinstance(submitted, dict):
            logger.warning("Rejected settings payload", extra={"option_id": page.option_id})
            return jsonify({"error": "invalid_payload"}), 400
    else:
        submitted = page.extract_submission(request.form)

    cleaned = page.save(submitted)
    if _prefers_json_response():
        return jsonify({"option_id": page.option_id, "values": cleaned})

    flash("Settings saved.", "success")
    return redirect(url_for("settings.show", **{"settings-updated": "true"}))


@bp.post("/reset")
def reset():
    """Forget stored values so every field shows its default."""

    page = _page()
    page.reset()
    logger.info("Settings restored to defaults", extra={"option_id": page.option_id})
    if _prefers_json_response():
        return jsonify({"option_id": page.option_id, "values": page.values()})

    flash("Settings restored to defaults.", "info")
    return redirect(url_for("settings.show", restored="true"))
