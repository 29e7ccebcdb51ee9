"""Lark-based parser for the CSS ``font`` shorthand."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

__all__ = ["FontShorthand", "parse_font_shorthand"]

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "font.lark"


@dataclass(frozen=True)
class FontShorthand:
    """Longhand values expanded from a ``font`` declaration.

    Longhands the shorthand leaves out are reset to ``normal``. Family names
    are kept as written, quotes included.
    """

    family: tuple[str, ...]
    size: str
    line_height: str = "normal"
    style: str = "normal"
    variant: str = "normal"
    weight: str = "normal"
    stretch: str = "normal"


class FontShorthandTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a ``font`` parse tree into a :class:`FontShorthand`."""

    # ---- prefix keywords ----

    def style(self, items: list[Token]) -> tuple[str, str]:
        return ("style", str(items[0]).lower())

    def variant(self, items: list[Token]) -> tuple[str, str]:
        return ("variant", str(items[0]).lower())

    def weight(self, items: list[Token]) -> tuple[str, str]:
        return ("weight", str(items[0]).lower())

    def stretch(self, items: list[Token]) -> tuple[str, str]:
        return ("stretch", str(items[0]).lower())

    def normal(self, items: list[Token]) -> tuple[str, str]:
        return ("normal", "normal")

    # ---- families ----

    def quoted_family(self, items: list[Token]) -> str:
        return str(items[0])

    def bare_family(self, items: list[Token]) -> str:
        return " ".join(str(t) for t in items)

    def start(self, items: list[object]) -> FontShorthand:
        values: dict[str, str] = {}
        families: list[str] = []
        size = ""
        line_height = "normal"
        for item in items:
            if isinstance(item, Token):
                if item.type == "FONT_SIZE":
                    size = str(item).lower()
                elif item.type == "LINE_HEIGHT":
                    line_height = str(item).lower()
            elif isinstance(item, tuple):
                key, value = item
                # ``normal`` only says "this slot keeps its initial value".
                if key != "normal":
                    values[key] = value
            else:
                families.append(str(item))
        return FontShorthand(
            family=tuple(families),
            size=size,
            line_height=line_height,
            **values,
        )


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="earley",
        lexer="dynamic",
        start="start",
    )


@lru_cache(maxsize=512)
def parse_font_shorthand(value: str) -> FontShorthand | None:
    """Parse a ``font`` declaration value.

    Returns None for values the shorthand grammar does not cover, such as
    system fonts (``font: menu``) or global keywords (``font: inherit``).
    """
    if not value or not value.strip():
        return None
    try:
        tree = _parser().parse(value.strip())
    except LarkError as exc:
        logger.debug("Ignoring unparseable font shorthand %r: %s", value, exc)
        return None
    return FontShorthandTransformer().transform(tree)
