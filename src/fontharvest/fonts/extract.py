"""Font descriptor extraction: ``@font-face`` rules to WebFont objects."""

from __future__ import annotations

import logging
import posixpath
import re
from urllib.parse import unquote, urljoin

from fontharvest.css.properties import unquote as unquote_name
from fontharvest.model.document import Document, FontFaceRule, StyleDeclaration
from fontharvest.model.webfont import FontFile, WebFont

__all__ = ["FORMAT_BY_EXTENSION", "parse_src", "resolve_font_url", "parse_font_face", "extract_web_fonts"]

logger = logging.getLogger(__name__)

FORMAT_BY_EXTENSION: dict[str, str] = {
    ".eot": "embedded-opentype",
    ".woff2": "woff2",
    ".woff": "woff",
    ".ttf": "truetype",
    ".otf": "opentype",
    ".svg": "svg",
}

# url(...) optionally followed by format(...)
_FONT_URL_RE = re.compile(
    r"""
    url\(\s*(?P<q>["']?)(?P<url>.*?)(?P=q)\s*\)          # url("...")
    (?:\s*format\(\s*(?P<fq>["']?)(?P<format>.*?)(?P=fq)\s*\))?   # format("...")
    """,
    re.IGNORECASE | re.VERBOSE,
)

_SERVER_RE = re.compile(r"^https?://", re.IGNORECASE)


def resolve_font_url(url: str, base_url: str) -> str:
    """Resolve *url* against *base_url* and drop parts a server ignores.

    Remote URLs lose their fragment; local ones lose query and fragment.
    The result is percent-decoded.
    """
    if not _SERVER_RE.match(url) and base_url:
        url = urljoin(base_url, url)
    if _SERVER_RE.match(url):
        url = re.sub(r"#.*$", "", url)
    else:
        url = re.sub(r"[?#].*$", "", url)
    return unquote(url)


def _infer_format(url: str) -> str | None:
    path = re.sub(r"\?.*$", "", url)
    ext = posixpath.splitext(path)[1].lower()
    return FORMAT_BY_EXTENSION.get(ext)


def parse_src(src: str, base_url: str) -> list[FontFile]:
    """Parse an ``@font-face`` ``src`` value into font files."""
    files: list[FontFile] = []
    for match in _FONT_URL_RE.finditer(src or ""):
        url = resolve_font_url(match.group("url"), base_url)
        fmt = match.group("format")
        if fmt:
            fmt = fmt.lower()
        else:
            fmt = _infer_format(url)
        files.append(FontFile(url=url, format=fmt))
    return files


def _value(style: StyleDeclaration, name: str) -> str:
    return (style.get_property_value(name) or "").strip()


def parse_font_face(rule: FontFaceRule) -> WebFont | None:
    """Build a WebFont from an ``@font-face`` rule.

    Returns None when the rule has no family or no usable ``src`` URL.
    """
    style = rule.style
    family = unquote_name(_value(style, "font-family"))
    if not family:
        logger.debug("Skipping @font-face without font-family")
        return None

    files = parse_src(_value(style, "src"), rule.base_url)
    if not files:
        logger.debug("Skipping @font-face %r without src url", family)
        return None

    return WebFont.create(
        family,
        files,
        stretch=_value(style, "font-stretch"),
        style=_value(style, "font-style"),
        weight=_value(style, "font-weight"),
    )


def extract_web_fonts(document: Document) -> list[WebFont]:
    """Collect a WebFont for every usable ``@font-face`` rule, in order."""
    web_fonts: list[WebFont] = []
    for rule in document.rules():
        if not isinstance(rule, FontFaceRule):
            continue
        web_font = parse_font_face(rule)
        if web_font is not None:
            web_fonts.append(web_font)
    return web_fonts
