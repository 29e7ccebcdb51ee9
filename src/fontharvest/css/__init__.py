"""CSS value handling: list splitting, ``content`` and ``font`` parsing,
and font property resolution over declaration blocks."""

from fontharvest.css.content import ContentToken, parse_content, render_content, tokenize_content
from fontharvest.css.properties import (
    computed_font_families,
    computed_font_info,
    computed_font_style,
    computed_font_weight,
    has_font_style,
    normalize_families,
)
from fontharvest.css.shorthand import FontShorthand, parse_font_shorthand
from fontharvest.css.split import split_list

__all__ = [
    "split_list",
    "ContentToken",
    "tokenize_content",
    "parse_content",
    "render_content",
    "FontShorthand",
    "parse_font_shorthand",
    "normalize_families",
    "computed_font_families",
    "computed_font_style",
    "computed_font_weight",
    "computed_font_info",
    "has_font_style",
]
