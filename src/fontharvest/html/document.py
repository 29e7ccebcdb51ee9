"""Document model provider backed by lxml, cssselect and cssutils.

``HtmlDocument`` parses an HTML string with lxml, collects its ``<style>``
and ``<link rel="stylesheet">`` sheets in document order with cssutils and
answers selector queries through ``lxml.cssselect``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator
from urllib.parse import unquote, urljoin, urlparse

import cssutils
import lxml.html
from cssselect import SelectorError
from lxml.cssselect import CSSSelector

from fontharvest.errors import UnsupportedSelectorError
from fontharvest.model.document import CSSRule

__all__ = [
    "Loader",
    "load_local",
    "CssDeclaration",
    "CssFontFaceRule",
    "CssStyleRule",
    "HtmlNode",
    "HtmlDocument",
]

logger = logging.getLogger(__name__)

# cssutils reports every unknown property at WARNING level.
cssutils.log.setLevel(logging.CRITICAL)

#: Returns the text of a style sheet, or None when it cannot be loaded.
Loader = Callable[[str], "str | None"]


def load_local(url: str) -> str | None:
    """Read ``file:`` URLs and plain paths; anything remote is skipped."""
    parsed = urlparse(url)
    if parsed.scheme == "file":
        path = Path(unquote(parsed.path))
    elif not parsed.scheme or len(parsed.scheme) == 1:  # "C:/..." drive letters
        path = Path(unquote(url))
    else:
        logger.debug("Not loading remote style sheet %s", url)
        return None
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.debug("Cannot load style sheet %s: %s", url, exc)
        return None


class CssDeclaration:
    """A cssutils ``CSSStyleDeclaration`` seen through the provider protocol."""

    def __init__(self, style: cssutils.css.CSSStyleDeclaration) -> None:
        self._style = style

    @property
    def property_names(self) -> list[str]:
        names: list[str] = []
        for prop in self._style.getProperties(all=True):
            if prop.name in names:
                names.remove(prop.name)
            names.append(prop.name)
        return names

    def get_property_value(self, name: str) -> str:
        return self._style.getPropertyValue(name)

    def is_important(self, name: str) -> bool:
        return bool(self._style.getPropertyPriority(name))

    @classmethod
    def parse(cls, text: str) -> CssDeclaration:
        """Parse the body of a declaration block, e.g. a ``style`` attribute."""
        return cls(cssutils.parseStyle(text, validate=False))


class CssFontFaceRule:
    """An ``@font-face`` rule with the URL of the sheet that declares it."""

    def __init__(self, style: CssDeclaration, base_url: str) -> None:
        self.style = style
        self.base_url = base_url

    def __repr__(self) -> str:
        return f"CssFontFaceRule(base_url={self.base_url!r})"


class CssStyleRule:
    """A style rule: selector list plus declarations."""

    def __init__(self, selector_text: str, style: CssDeclaration) -> None:
        self.selector_text = selector_text
        self.style = style

    def __repr__(self) -> str:
        return f"CssStyleRule(selector_text={self.selector_text!r})"


class HtmlNode:
    """An lxml element seen through the provider protocol.

    Nodes are created once per element by their document, so identity is
    stable across queries.
    """

    def __init__(self, element: lxml.html.HtmlElement, document: HtmlDocument) -> None:
        self._element = element
        self._document = document
        self._inline_style: CssDeclaration | None = None

    def __repr__(self) -> str:
        return f"HtmlNode(<{self.tag_name}>)"

    @property
    def element(self) -> lxml.html.HtmlElement:
        return self._element

    @property
    def tag_name(self) -> str | None:
        tag = self._element.tag
        return tag.lower() if isinstance(tag, str) else None

    @property
    def children(self) -> list[HtmlNode]:
        return [
            self._document.node_for(child)
            for child in self._element
            if isinstance(child.tag, str)
        ]

    @property
    def text_content(self) -> str:
        return str(self._element.text_content())

    def get_attribute(self, name: str) -> str | None:
        return self._element.get(name)

    @property
    def inline_style(self) -> CssDeclaration | None:
        text = self._element.get("style")
        if not text:
            return None
        if self._inline_style is None:
            self._inline_style = CssDeclaration.parse(text)
        return self._inline_style


class HtmlDocument:
    """An HTML document with its style sheets, ready for spidering."""

    def __init__(self, html: str, url: str = "", loader: Loader | None = None) -> None:
        self._url = url
        self._loader = loader or load_local
        self._root_element = lxml.html.document_fromstring(html, base_url=url or None)
        self._nodes: dict[lxml.html.HtmlElement, HtmlNode] = {}
        self._selectors: dict[str, CSSSelector] = {}
        self._parser = cssutils.CSSParser(fetcher=self._fetch, validate=False)
        self._sheets = list(self._collect_sheets())

    @classmethod
    def from_file(cls, path: str | Path, loader: Loader | None = None) -> HtmlDocument:
        """Parse a local HTML file; relative URLs resolve against its location."""
        path = Path(path).resolve()
        return cls(path.read_text(encoding="utf-8"), url=path.as_uri(), loader=loader)

    @property
    def url(self) -> str:
        return self._url

    @property
    def base_url(self) -> str:
        """Document URL, overridden by a ``<base href>`` when present."""
        for base in self._root_element.iter("base"):
            href = base.get("href")
            if href:
                return urljoin(self._url, href)
        return self._url

    @property
    def root(self) -> HtmlNode:
        return self.node_for(self._root_element)

    def node_for(self, element: lxml.html.HtmlElement) -> HtmlNode:
        node = self._nodes.get(element)
        if node is None:
            node = HtmlNode(element, self)
            self._nodes[element] = node
        return node

    # ---- style sheets ----

    def _fetch(self, url: str) -> tuple[str | None, str] | None:
        text = self._loader(url)
        if text is None:
            return None
        return None, text

    def _collect_sheets(self) -> Iterator[cssutils.css.CSSStyleSheet]:
        base_url = self.base_url
        for element in self._root_element.iter("style", "link"):
            if element.tag == "style":
                yield self._parser.parseString(element.text or "", href=base_url or None)
                continue
            rel = (element.get("rel") or "").lower().split()
            href = element.get("href")
            if "stylesheet" not in rel or not href:
                continue
            url = urljoin(base_url, href)
            text = self._loader(url)
            if text is None:
                continue
            yield self._parser.parseString(text, href=url)

    def _flatten(self, rules: object, sheet_url: str) -> Iterator[CSSRule]:
        for rule in rules:  # type: ignore[attr-defined]
            if isinstance(rule, cssutils.css.CSSImportRule):
                sheet = rule.styleSheet
                if sheet is not None:
                    yield from self._flatten(sheet.cssRules, urljoin(sheet_url, sheet.href or ""))
            elif isinstance(rule, cssutils.css.CSSMediaRule):
                yield from self._flatten(rule.cssRules, sheet_url)
            elif isinstance(rule, cssutils.css.CSSFontFaceRule):
                yield CssFontFaceRule(CssDeclaration(rule.style), sheet_url)
            elif isinstance(rule, cssutils.css.CSSStyleRule):
                yield CssStyleRule(rule.selectorText, CssDeclaration(rule.style))

    def rules(self) -> Iterator[CSSRule]:
        """All font-face and style rules, ``@import``/``@media`` flattened."""
        for sheet in self._sheets:
            yield from self._flatten(sheet.cssRules, sheet.href or self.base_url)

    # ---- queries ----

    def select(self, selector: str) -> list[HtmlNode]:
        compiled = self._selectors.get(selector)
        if compiled is None:
            try:
                compiled = CSSSelector(selector, translator="html")
            except SelectorError as exc:
                raise UnsupportedSelectorError(selector, cause=exc) from exc
            self._selectors[selector] = compiled
        return [self.node_for(element) for element in compiled(self._root_element)]
