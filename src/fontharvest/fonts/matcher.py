"""Font matching: pick the web fonts that render text in a given font info.

Candidates are ranked the way a browser falls back: family order first, then
style, then weight. A font is used when its family is listed and its style is
acceptable; each family is used at most once per node.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Mapping

from fontharvest.config import FONT_STYLE_ORDER
from fontharvest.model.fontinfo import FontInfo
from fontharvest.model.webfont import WebFont

__all__ = [
    "font_weight_value",
    "weight_distance",
    "style_rank",
    "match_font_style",
    "match_font_family",
    "rank_web_fonts",
    "match_web_fonts",
    "harvest",
]

_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")

_NAMED_WEIGHTS = {"normal": 400.0, "bold": 700.0}

# Bucket offsets; a bucket is worse than every distance inside a better one.
_NEAR = 1000.0
_FAR = 2000.0
_FARTHEST = 3000.0

_SLANTED = frozenset({"italic", "oblique"})


def font_weight_value(weight: str | float | None, default: float = 400.0) -> float:
    """Convert a font-weight keyword or number to a number.

    Undeclared or unknown values fall back to *default*. A variable-font
    range (``"100 900"``) yields its lower bound; see :func:`weight_distance`.
    """
    if isinstance(weight, (int, float)):
        return float(weight)
    text = (weight or "").strip().lower()
    if text in _NAMED_WEIGHTS:
        return _NAMED_WEIGHTS[text]
    first = text.split()[0] if text else ""
    if _NUMBER_RE.match(first):
        return float(first)
    return default


def _weight_range(weight: str) -> tuple[float, float]:
    parts = (weight or "").split()
    if len(parts) == 2 and all(_NUMBER_RE.match(p) for p in parts):
        low, high = sorted(float(p) for p in parts)
        return low, high
    value = font_weight_value(weight)
    return value, value


def _bucketed(desired: float, weight: float) -> float:
    if weight == desired:
        return 0.0
    if 400 <= desired <= 500:
        if desired <= weight <= 500:
            return _NEAR + weight - desired
        if weight < desired:
            return _FAR + desired - weight
        return _FARTHEST + weight - desired
    if desired < 400:
        if weight <= desired:
            return _NEAR + desired - weight
        return _FAR + weight - desired
    if weight >= desired:
        return _NEAR + weight - desired
    return _FAR + desired - weight


def weight_distance(desired: str | float, declared: str) -> float:
    """Fallback distance from a desired weight to a declared one.

    Lower is better. An exact match scores 0. Otherwise the weight lands in a
    bucket per the CSS weight matching rules and closer weights win inside a
    bucket. A declared range is scored by its best endpoint, or 0 if the
    desired weight lies inside it.
    """
    wanted = font_weight_value(desired)
    low, high = _weight_range(declared)
    if low <= wanted <= high:
        return 0.0
    return min(_bucketed(wanted, low), _bucketed(wanted, high))


def _style_keyword(style: str | None) -> str:
    text = (style or "").strip().lower()
    return text.split()[0] if text else "normal"


def style_rank(
    desired: str,
    declared: str,
    style_order: Mapping[str, Mapping[str, int]] = FONT_STYLE_ORDER,
) -> int:
    """Preference rank of a declared face style for a desired style."""
    order = style_order.get(_style_keyword(desired), style_order["normal"])
    return order.get(_style_keyword(declared), len(order))


def match_font_family(web_font: WebFont, info: FontInfo) -> bool:
    return info.has_family(web_font.family)


def match_font_style(web_font: WebFont, info: FontInfo) -> bool:
    """Whether *web_font* may render text in *info*'s style.

    Italic and oblique text falls back onto any face, since the browser
    slants upright glyphs when no slanted face exists.
    """
    wanted = _style_keyword(info.style)
    return wanted == _style_keyword(web_font.style) or wanted in _SLANTED


def rank_web_fonts(
    info: FontInfo,
    web_fonts: Iterable[WebFont],
    style_order: Mapping[str, Mapping[str, int]] = FONT_STYLE_ORDER,
) -> list[WebFont]:
    """Sort *web_fonts* by family position, style rank, then weight distance.

    Fonts whose family is not listed in *info* sort last. The sort is stable.
    """

    def key(web_font: WebFont) -> tuple[int, int, float]:
        position = info.family_index(web_font.family)
        return (
            position if position != -1 else len(info.family),
            style_rank(info.style, web_font.style, style_order),
            weight_distance(info.weight, web_font.weight),
        )

    return sorted(web_fonts, key=key)


def match_web_fonts(
    info: FontInfo,
    web_fonts: Iterable[WebFont],
    style_order: Mapping[str, Mapping[str, int]] = FONT_STYLE_ORDER,
) -> Iterator[WebFont]:
    """Yield the best acceptable font of every family listed in *info*."""
    seen: set[str] = set()
    for web_font in rank_web_fonts(info, web_fonts, style_order):
        if web_font.family in seen:
            continue
        if match_font_family(web_font, info) and match_font_style(web_font, info):
            seen.add(web_font.family)
            yield web_font


def harvest(
    text: str,
    info: FontInfo,
    web_fonts: Iterable[WebFont],
    style_order: Mapping[str, Mapping[str, int]] = FONT_STYLE_ORDER,
) -> list[WebFont]:
    """Add *text* to every font that renders it; return those fonts."""
    matched = list(match_web_fonts(info, web_fonts, style_order))
    for web_font in matched:
        web_font.add_chars(text)
    return matched
