"""Spider configuration: lookup tables and processing switches."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from fontharvest.model.fontinfo import FontInfo

_MONOSPACE = FontInfo(family=("monospace",), style="normal", weight="normal")
_BOLD = FontInfo(family=(), style="normal", weight="bold")
_ITALIC = FontInfo(family=(), style="italic", weight="normal")

#: Initial font info of a tag before any author style applies.
DEFAULT_FONT_INFO = FontInfo(family=(), style="normal", weight="normal")

#: User-agent defaults per (lower-cased) tag name.
TAG_DEFAULTS: Mapping[str, FontInfo] = MappingProxyType({
    "address": _ITALIC,
    "b": _BOLD,
    "cite": _ITALIC,
    "code": _MONOSPACE,
    "dfn": _ITALIC,
    "em": _ITALIC,
    "h1": _BOLD,
    "h2": _BOLD,
    "h3": _BOLD,
    "h4": _BOLD,
    "h5": _BOLD,
    "h6": _BOLD,
    "i": _ITALIC,
    "kbd": _MONOSPACE,
    "pre": _MONOSPACE,
    "samp": _MONOSPACE,
    "strong": _BOLD,
    "th": _BOLD,
    "var": _ITALIC,
})

#: Preference rank of a declared font-face style, per requested style.
FONT_STYLE_ORDER: Mapping[str, Mapping[str, int]] = MappingProxyType({
    "normal": MappingProxyType({"normal": 0, "oblique": 1, "italic": 2}),
    "italic": MappingProxyType({"italic": 0, "oblique": 1, "normal": 2}),
    "oblique": MappingProxyType({"oblique": 0, "italic": 1, "normal": 2}),
})

INLINE_STYLE_SELECTOR = 'body[style*="font"], body [style*="font"]'


@dataclass(frozen=True)
class SpiderConfig:
    """Configuration for a font spider run."""

    tag_defaults: Mapping[str, FontInfo] = field(default_factory=lambda: TAG_DEFAULTS)
    default_font_info: FontInfo = DEFAULT_FONT_INFO
    style_order: Mapping[str, Mapping[str, int]] = field(
        default_factory=lambda: FONT_STYLE_ORDER
    )
    inline_style_selector: str = INLINE_STYLE_SELECTOR
    case_variants: bool = True  # harvest lower/upper case forms too
    ignore_inline_fonts: bool = True  # drop fonts served only as data: URIs
    max_workers: int = 4

    def defaults_for(self, tag_name: str | None) -> FontInfo:
        """Return the user-agent font info for *tag_name*."""
        if not tag_name:
            return self.default_font_info
        return self.tag_defaults.get(tag_name.lower(), self.default_font_info)
