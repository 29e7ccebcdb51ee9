"""Resolve the font longhands a single declaration block sets.

Each resolver scans the block in source order over the longhand and the
``font`` shorthand. The last declaration wins unless the value currently
winning is ``!important`` and the later one is not.
"""

from __future__ import annotations

import re
from typing import Callable

from fontharvest.css.shorthand import FontShorthand, parse_font_shorthand
from fontharvest.css.split import split_list
from fontharvest.model.document import StyleDeclaration
from fontharvest.model.fontinfo import FontInfo

__all__ = [
    "FONT_KEYWORDS",
    "normalize_families",
    "split_families",
    "computed_font_families",
    "computed_font_style",
    "computed_font_weight",
    "computed_font_info",
    "has_font_style",
]

FONT_KEYWORDS = frozenset({
    "serif",
    "sans-serif",
    "monospace",
    "cursive",
    "fantasy",
    "initial",
    "inherit",
})

_QUOTATION_RE = re.compile(r"""(?:^"|"$)|(?:^'|'$)""")


def unquote(value: str) -> str:
    """Strip one pair of surrounding quotes."""
    return _QUOTATION_RE.sub("", value)


def split_families(value: str) -> list[str]:
    """Split a font-family value on commas outside quotes and trim."""
    return [name.strip() for name in split_list(value)]


def normalize_families(names: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Keep generic keywords bare and double-quote every other name."""
    normalized: list[str] = []
    for name in names:
        if name in FONT_KEYWORDS:
            normalized.append(name)
        else:
            normalized.append('"' + unquote(name) + '"')
    return tuple(normalized)


def _scan(
    style: StyleDeclaration,
    longhand: str,
    from_shorthand: Callable[[FontShorthand], object],
) -> object | None:
    winner: object | None = None
    important = False
    for name in style.property_names:
        if name == longhand:
            value: object = style.get_property_value(name)
        elif name == "font":
            shorthand = parse_font_shorthand(style.get_property_value(name))
            if shorthand is None:
                continue
            value = from_shorthand(shorthand)
        else:
            continue
        priority = style.is_important(name)
        if priority or not important or winner is None:
            winner = value
            important = priority
    return winner


def computed_font_families(style: StyleDeclaration) -> tuple[str, ...]:
    """Normalized font-family list declared by *style*; empty if none."""
    value = _scan(style, "font-family", lambda s: list(s.family))
    if value is None:
        return ()
    names = split_families(value) if isinstance(value, str) else list(value)
    names = [name for name in names if name]
    if not names or names[0] == "inherit":
        return ()
    return normalize_families(names)


def _keyword(value: object | None) -> str:
    text = str(value).strip() if value is not None else ""
    if text.lower() == "inherit":
        return ""
    return text


def computed_font_style(style: StyleDeclaration) -> str:
    """font-style declared by *style*; ``""`` if none or ``inherit``."""
    return _keyword(_scan(style, "font-style", lambda s: s.style))


def computed_font_weight(style: StyleDeclaration) -> str:
    """font-weight declared by *style*; ``""`` if none or ``inherit``."""
    return _keyword(_scan(style, "font-weight", lambda s: s.weight))


def computed_font_info(style: StyleDeclaration) -> FontInfo:
    return FontInfo(
        family=computed_font_families(style),
        style=computed_font_style(style),
        weight=computed_font_weight(style),
    )


def has_font_style(style: StyleDeclaration) -> bool:
    """True if *style* declares any of font-family, font-style, font-weight."""
    return bool(computed_font_info(style))
