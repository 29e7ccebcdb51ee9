"""fontharvest model layer -- public type re-exports."""

from fontharvest.model.document import (
    CSSRule,
    Document,
    FontFaceRule,
    Node,
    StyleDeclaration,
    StyleRule,
)
from fontharvest.model.fontinfo import FontInfo, PseudoNode, StyledNode
from fontharvest.model.webfont import FontFile, WebFont, web_font_id

__all__ = [
    # font info
    "FontInfo",
    "PseudoNode",
    "StyledNode",
    # web fonts
    "FontFile",
    "WebFont",
    "web_font_id",
    # provider protocols
    "StyleDeclaration",
    "FontFaceRule",
    "StyleRule",
    "CSSRule",
    "Node",
    "Document",
]
