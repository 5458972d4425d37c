"""Tests for markup filtering and URL helpers."""

from __future__ import annotations

import pytest

from settingspage.fields.markup import (
    DESCRIPTION_TAGS,
    coerce_url,
    filter_markup,
    filter_post_markup,
    strip_all_tags,
    unslash,
)


def test_strip_all_tags_drops_script_and_style_bodies():
    assert strip_all_tags("<style>p{}</style><p>Hello <b>there</b></p><script>evil()</script>") == "Hello there"


def test_strip_all_tags_decodes_entities():
    assert strip_all_tags("Fish &amp; chips & peas") == "Fish & chips & peas"


@pytest.mark.parametrize(
    "raw",
    [
        "<noscript><span></noscript>Acme",
        "<object><embed></object>Acme",
        "<template><b>hidden</template>Acme",
    ],
)
def test_strip_all_tags_keeps_text_after_mismatched_dropped_elements(raw):
    assert strip_all_tags(raw) == "Acme"


def test_text_after_mismatched_dropped_elements_survives_sanitize(make_page):
    page = make_page()

    assert page.sanitize({"site_name": "<object><embed></object>Acme"}) == {"site_name": "Acme"}


def test_post_filter_removes_event_handlers_and_bad_links():
    html = '<a href="JaVaScRiPt:go()" title="t" onmouseover="x">go</a><img src="/a.png" onerror="x" alt="">'

    assert filter_post_markup(html) == '<a title="t">go</a><img src="/a.png" alt="" />'


def test_post_filter_keeps_allowed_structure():
    html = '<p class="lead">One<br>Two</p><ul><li>Item</li></ul>'

    assert filter_post_markup(html) == '<p class="lead">One<br />Two</p><ul><li>Item</li></ul>'


def test_filter_escapes_attribute_values():
    assert filter_markup('<span class="a&quot;b">x</span>', DESCRIPTION_TAGS) == '<span class="a&#34;b">x</span>'


def test_filter_drops_comments():
    assert filter_post_markup("a<!-- hidden -->b") == "ab"


def test_filter_unwraps_disallowed_tags_and_closes_open_ones():
    html = '<section><strong>Bold</strong> <u>plain</section><strong>open'

    assert filter_markup(html, DESCRIPTION_TAGS) == "<strong>Bold</strong> plain<strong>open</strong>"


def test_filter_escapes_decoded_angle_brackets():
    assert filter_post_markup("&lt;script&gt;go()&lt;/script&gt;") == "&lt;script>go()&lt;/script>"


def test_unslash():
    assert unslash('He said \\"hi\\" \\\\ done') == 'He said "hi" \\ done'


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://example.com/a?b=c#d", "https://example.com/a?b=c#d"),
        ("example.com", "http://example.com"),
        ("mailto:me@example.com", "mailto:me@example.com"),
        ("https://exa mple.com/x y", "https://exa%20mple.com/x%20y"),
        ("javascript:alert(1)", ""),
        ("data:text/html,hi", ""),
        ("/relative/path", ""),
        ("http://", ""),
        ("   ", ""),
    ],
)
def test_coerce_url(raw, expected):
    assert coerce_url(raw) == expected
