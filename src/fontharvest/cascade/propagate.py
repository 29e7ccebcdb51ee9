"""Inheritance propagation: push font state down the tree and harvest text."""

from __future__ import annotations

import logging
from typing import Iterable

from fontharvest.cascade.walker import StyleMap
from fontharvest.config import SpiderConfig
from fontharvest.fonts.matcher import font_weight_value, harvest
from fontharvest.model.document import Node
from fontharvest.model.fontinfo import FontInfo
from fontharvest.model.webfont import WebFont

__all__ = ["resolve_relative_weight", "inherit", "effective_info", "node_text", "propagate"]

logger = logging.getLogger(__name__)

_PLACEHOLDER_TAGS = frozenset({"input", "textarea"})


def resolve_relative_weight(weight: str, inherited_weight: str) -> str:
    """Resolve ``bolder`` / ``lighter`` against the inherited weight."""
    keyword = weight.strip().lower()
    if keyword not in ("bolder", "lighter"):
        return weight
    base = font_weight_value(inherited_weight or "normal")
    if keyword == "bolder":
        if base < 350:
            value = 400.0
        elif base < 550:
            value = 700.0
        elif base < 900:
            value = 900.0
        else:
            value = base
    else:
        if base < 100:
            value = base
        elif base < 550:
            value = 100.0
        elif base < 750:
            value = 400.0
        else:
            value = 700.0
    return f"{value:g}"


def inherit(explicit: FontInfo, inherited: FontInfo) -> FontInfo:
    """Layer a node's explicit font info over what it inherits."""
    if explicit.weight:
        explicit = FontInfo(
            family=explicit.family,
            style=explicit.style,
            weight=resolve_relative_weight(explicit.weight, inherited.weight),
        )
    return explicit.merged_over(inherited)


def effective_info(inherited: FontInfo, tag_name: str | None, config: SpiderConfig) -> FontInfo:
    """Inherited info with empty fields filled from the tag's defaults."""
    return inherited.with_defaults(config.defaults_for(tag_name))


def node_text(node: Node) -> str:
    """Text a node renders; form fields fall back to their placeholder."""
    text = node.text_content or ""
    if not text and (node.tag_name or "").lower() in _PLACEHOLDER_TAGS:
        text = node.get_attribute("placeholder") or ""
    return text


def _harvest_node(
    node: Node,
    inherited: FontInfo,
    fonts: list[WebFont],
    config: SpiderConfig,
) -> bool:
    text = node_text(node)
    if not text:
        return False
    if config.case_variants:
        text = text + text.lower() + text.upper()
    info = effective_info(inherited, node.tag_name, config)
    harvest(text, info, fonts, config.style_order)
    return True


def propagate(
    root: Node,
    style_map: StyleMap,
    web_fonts: Iterable[WebFont],
    config: SpiderConfig | None = None,
) -> int:
    """Walk the tree from *root* and add rendered text to matching fonts.

    Nodes are visited depth-first in document order. At each node its
    explicit font info from *style_map* is layered over the inherited info.
    Its ``::before`` / ``::after`` children are harvested first, each with
    its own rule's info layered over that state, then the node itself once
    the node or an ancestor has declared a font. Children inherit the
    layered info, never the tag defaults.

    Returns the number of nodes whose text was harvested.
    """
    config = config or SpiderConfig()
    fonts = list(web_fonts)
    harvested = 0
    stack: list[tuple[Node, FontInfo, bool]] = [(root, FontInfo.EMPTY, False)]

    while stack:
        node, inherited, have_font_style = stack.pop()

        styled = style_map.get(node)
        if styled is not None and styled.info is not None:
            inherited = inherit(styled.info, inherited)
            have_font_style = True

        if styled is not None:
            for kind in ("::before", "::after"):
                pseudo = styled.pseudo.get(kind)
                if pseudo is None:
                    continue
                if _harvest_node(pseudo, inherit(pseudo.info, inherited), fonts, config):
                    harvested += 1

        if node.tag_name and have_font_style:
            if _harvest_node(node, inherited, fonts, config):
                harvested += 1

        stack.extend(
            (child, inherited, have_font_style) for child in reversed(node.children)
        )

    logger.debug("Harvested text from %d node(s)", harvested)
    return harvested
