"""HTML allow-list filtering, tag stripping, and URL coercion."""

from __future__ import annotations

import re
import warnings
from typing import Iterable, Mapping
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.element import NavigableString, PreformattedString, Tag
from markupsafe import Markup, escape

# Short settings values such as "example.com" are markup here, never file names.
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

AllowList = Mapping[str, Iterable[str]]

_LINK = ("href", "target")
_IDENTIFY = ("class", "id")

# Field labels ("name" plus "after_name").
LABEL_TAGS: AllowList = {
    "i": (),
    "em": (),
    "br": (),
    "span": _IDENTIFY,
    "a": _LINK,
    "code": (),
}

# Field descriptions beneath controls.
DESCRIPTION_TAGS: AllowList = {
    "b": (),
    "strong": (),
    "a": _LINK,
    "br": (),
    "span": _IDENTIFY,
    "code": (),
}

# Page and section descriptions.
PAGE_TAGS: AllowList = {
    "b": (),
    "strong": (),
    "i": (),
    "em": (),
    "br": (),
    "a": _LINK,
    "span": _IDENTIFY,
    "code": (),
}

# Markup accepted in stored text and static content, modelled on what a CMS
# allows in primary post content.
POST_TAGS: AllowList = {
    "a": ("href", "title", "target", "rel", "name", "class", "id"),
    "abbr": ("title",),
    "b": (),
    "blockquote": ("cite", "class"),
    "br": (),
    "cite": (),
    "code": (),
    "del": ("datetime",),
    "div": ("class", "id", "align"),
    "em": (),
    "h1": ("class", "id"),
    "h2": ("class", "id"),
    "h3": ("class", "id"),
    "h4": ("class", "id"),
    "h5": ("class", "id"),
    "h6": ("class", "id"),
    "hr": (),
    "i": (),
    "img": ("src", "alt", "title", "width", "height", "class", "id"),
    "ins": ("datetime",),
    "li": ("class",),
    "ol": ("class", "start"),
    "p": ("class", "id", "align"),
    "pre": ("class",),
    "q": ("cite",),
    "s": (),
    "small": (),
    "span": ("class", "id", "title"),
    "strike": (),
    "strong": (),
    "sub": (),
    "sup": (),
    "table": ("class", "id"),
    "tbody": (),
    "td": ("colspan", "rowspan", "class"),
    "tfoot": (),
    "th": ("colspan", "rowspan", "class", "scope"),
    "thead": (),
    "tr": ("class",),
    "u": (),
    "ul": ("class",),
}

# Elements whose text content is dropped along with the tags.
_DROP_CONTENT = frozenset({"script", "style", "iframe", "object", "embed", "noscript", "template"})

_URL_ATTRIBUTES = frozenset({"href", "src", "cite"})
_VOID_TAGS = frozenset({"br", "hr", "img"})

ALLOWED_PROTOCOLS = frozenset(
    {"http", "https", "ftp", "ftps", "mailto", "news", "irc", "gopher", "nntp", "feed", "telnet", "sms", "tel"}
)
_NETLOC_PROTOCOLS = frozenset({"http", "https", "ftp", "ftps", "feed", "gopher", "irc", "nntp", "telnet"})

_URL_STRIP = re.compile(r"[^a-z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\xff]", re.IGNORECASE)
_SLASH_ESCAPE = re.compile(r"\\(.?)", re.DOTALL)


def _escape_text(data: str) -> str:
    return data.replace("<", "&lt;")


def _parse(value: str) -> BeautifulSoup:
    """Parse a fragment, discarding elements whose content is never shown."""

    soup = BeautifulSoup(value, "html.parser", multi_valued_attributes=None)
    for tag in soup(list(_DROP_CONTENT)):
        # Nested drop elements go with their ancestor.
        if not tag.decomposed:
            tag.decompose()
    return soup


def _is_safe_link(value: str) -> bool:
    candidate = re.sub(r"[\x00-\x20]", "", value).lower()
    if ":" not in candidate.split("/", 1)[0].split("?", 1)[0].split("#", 1)[0]:
        return True
    return candidate.split(":", 1)[0] in ALLOWED_PROTOCOLS


def _render_attributes(tag: Tag, permitted: frozenset[str]) -> str:
    rendered = []
    for name, value in tag.attrs.items():
        if name not in permitted:
            continue
        value = value or ""
        if name in _URL_ATTRIBUTES and not _is_safe_link(value):
            continue
        rendered.append(f' {name}="{escape(value)}"')
    return "".join(rendered)


def _render_children(node: Tag, allowed: dict[str, frozenset[str]]) -> str:
    parts = []
    for child in node.children:
        if isinstance(child, PreformattedString):
            # Comments, doctypes, CDATA and processing instructions.
            continue
        if isinstance(child, NavigableString):
            parts.append(_escape_text(str(child)))
            continue
        inner = _render_children(child, allowed)
        if child.name not in allowed:
            # Unwrap: the tag goes, its content stays.
            parts.append(inner)
        elif child.name in _VOID_TAGS:
            parts.append(f"<{child.name}{_render_attributes(child, allowed[child.name])} />")
        else:
            attributes = _render_attributes(child, allowed[child.name])
            parts.append(f"<{child.name}{attributes}>{inner}</{child.name}>")
    return "".join(parts)


def filter_markup(value: str, allowed: AllowList) -> str:
    """Strip tags and attributes not present in ``allowed``; keep their text."""

    if not value:
        return ""
    permitted = {tag: frozenset(attrs) for tag, attrs in allowed.items()}
    return _render_children(_parse(value), permitted)


def filter_post_markup(value: str) -> str:
    return filter_markup(value, POST_TAGS)


def kses(value: str, allowed: AllowList) -> Markup:
    """Filter ``value`` and mark it safe for direct output in templates."""

    return Markup(filter_markup(value, allowed))


def strip_all_tags(value: str) -> str:
    """Return the text of ``value`` with entities decoded and script/style bodies dropped."""

    if not value:
        return ""
    return _parse(value).get_text().strip()

def unslash(value: str) -> str:
    """Remove backslash escaping from submitted form data."""

    return _SLASH_ESCAPE.sub(lambda match: match.group(1), value)


def coerce_url(value: str) -> str:
    """Return ``value`` as an absolute URL with an allowed protocol, else ``""``."""

    url = (value or "").strip().replace(" ", "%20")
    url = _URL_STRIP.sub("", url)
    if not url:
        return ""
    if ":" not in url.split("/", 1)[0] and not url.startswith(("/", "#", "?")):
        url = "http://" + url
    try:
        parts = urlsplit(url)
    except ValueError:
        return ""
    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_PROTOCOLS:
        return ""
    if scheme in _NETLOC_PROTOCOLS and not parts.netloc:
        return ""
    return url
