"""HTML document provider built on lxml, cssselect and cssutils."""

from fontharvest.html.document import (
    CssDeclaration,
    CssFontFaceRule,
    CssStyleRule,
    HtmlDocument,
    HtmlNode,
    Loader,
    load_local,
)

__all__ = [
    "HtmlDocument",
    "HtmlNode",
    "CssDeclaration",
    "CssFontFaceRule",
    "CssStyleRule",
    "Loader",
    "load_local",
]
