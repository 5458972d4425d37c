"""Settings configuration used when no configuration file is supplied."""

from __future__ import annotations

SAMPLE_SETTINGS = {
    "option_id": "sample_settings",
    "page_title": "Sample Settings",
    "menu_title": "Sample",
    "desc": "Settings for the <strong>sample</strong> site.",
    "sections": {
        "general": {
            "title": "General",
            "desc": "Basic site information.",
            "fields": {
                "site_name": {
                    "name": "Site Name",
                    "type": "text",
                    "default": "My Site",
                    "no_empty": True,
                },
                "tagline": {
                    "name": "Tagline",
                    "type": "textarea",
                    "allow_html": True,
                    "desc": "Shown beneath the site name. <code>em</code> and <code>strong</code> work.",
                },
                "homepage": {
                    "name": "Homepage",
                    "type": "url",
                    "default": "https://example.com",
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
                    "default": "blue",
                },
                "layout": {
                    "name": "Layout",
                    "type": "radio",
                    "options": {"wide": "Wide", "boxed": "Boxed"},
                    "default": "wide",
                    "inline": True,
                },
                "max_items": {
                    "name": "Items per Page",
                    "type": "number",
                    "default": 10,
                    "attributes": {"min": "1", "max": "100"},
                },
                "logo": {
                    "name": "Logo",
                    "type": "upload",
                    "upload_button": "Choose Logo",
                    "upload_title": "Select a logo image",
                    "upload_type": "image",
                    "upload_show_image": "200",
                },
            },
        },
        "notifications": {
            "title": "Notifications",
            "fields": {
                "newsletter": {
                    "name": "Newsletter",
                    "type": "checkbox",
                    "checkbox_label": "Send the weekly newsletter",
                },
                "newsletter_digest": {
                    "type": "checkbox",
                    "checkbox_label": "Bundle into a monthly digest instead",
                },
                "notice": {
                    "name": "About",
                    "type": "content",
                    "content": "<p>Notifications are sent from the site address.</p>",
                },
            },
        },
    },
}
