"""Cascade walker: apply font declarations of style rules to document nodes.

Rules are visited in document order so that later rules layer over earlier
ones with the :meth:`FontInfo.merged_over` rule. The result is a side-map
from node identity to explicit font state; document nodes are never mutated.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator

from fontharvest.config import SpiderConfig
from fontharvest.css.content import ContentToken, parse_content, render_content
from fontharvest.css.properties import computed_font_info
from fontharvest.css.split import split_list
from fontharvest.errors import ContentSyntaxError, UnsupportedSelectorError
from fontharvest.model.document import Document, Node, StyleRule
from fontharvest.model.fontinfo import FontInfo, PseudoNode, StyledNode

__all__ = [
    "StyleMap",
    "split_selectors",
    "pseudo_element",
    "element_selector",
    "select_nodes",
    "walk_cascade",
]

logger = logging.getLogger(__name__)

_PSEUDO_ELEMENT_RE = re.compile(r"::?(before|after)$", re.IGNORECASE)

# Any trailing pseudo-element, including vendor forms and the legacy
# single-colon spellings.
_ANY_PSEUDO_ELEMENT_RE = re.compile(
    r"(?:::[-\w]+(?:\([^()]*\))?|:(?:before|after|first-line|first-letter))$",
    re.IGNORECASE,
)

# State-dependent pseudo-classes; only structure matters for font usage.
_DYNAMIC_PSEUDO_CLASS_RE = re.compile(
    r"""
    :(?:link|visited|target|active|focus-within|focus-visible|focus|hover
        |checked|disabled|enabled|selected
        |lang\([-\w]{2,}\)
        |not\((?:[^()]|\([^()]*\))*\))
    (?![\w-])
    """,
    re.IGNORECASE | re.VERBOSE,
)


class StyleMap:
    """Explicit font state per node, keyed by node identity."""

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Node, StyledNode]] = {}
        # (selector, info) of every font rule selector, in document order.
        self.rule_selectors: list[tuple[str, FontInfo]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, node: object) -> bool:
        return id(node) in self._entries

    def get(self, node: object) -> StyledNode | None:
        entry = self._entries.get(id(node))
        return entry[1] if entry is not None else None

    def entry(self, node: Node) -> StyledNode:
        """Return the styled entry of *node*, creating it if needed."""
        found = self._entries.get(id(node))
        if found is None:
            found = (node, StyledNode())
            self._entries[id(node)] = found
        return found[1]

    def merge(self, node: Node, info: FontInfo) -> None:
        self.entry(node).merge(info)

    def attach_pseudo(self, node: Node, pseudo: PseudoNode) -> None:
        self.entry(node).pseudo[pseudo.tag_name] = pseudo

    def items(self) -> Iterator[tuple[Node, StyledNode]]:
        return iter(self._entries.values())


def split_selectors(selector_text: str) -> list[str]:
    """Split a selector list, keeping commas inside quotes, and trim."""
    return [s.strip() for s in split_list(selector_text) if s.strip()]


def pseudo_element(selector: str) -> str | None:
    """Return ``"before"`` / ``"after"`` if *selector* targets that pseudo-element."""
    match = _PSEUDO_ELEMENT_RE.search(selector)
    return match.group(1).lower() if match else None


def element_selector(selector: str) -> str:
    """Reduce *selector* to the elements it styles.

    Dynamic pseudo-classes and a trailing pseudo-element (``::before``,
    ``::first-line``, ``::placeholder``, ...) are removed; an empty
    remainder becomes ``*``.
    """
    selector = _DYNAMIC_PSEUDO_CLASS_RE.sub("", selector)
    selector = _ANY_PSEUDO_ELEMENT_RE.sub("", selector).strip()
    return selector or "*"


def select_nodes(document: Document, selector: str) -> list[Node]:
    """Query *document*; a selector the provider rejects matches nothing."""
    try:
        return document.select(selector)
    except UnsupportedSelectorError as exc:
        logger.debug("No matches for rejected selector %r: %s", selector, exc)
        return []


def _content_tokens(value: str) -> list[ContentToken]:
    try:
        return parse_content(value)
    except ContentSyntaxError as exc:
        logger.debug("Ignoring unparseable content %r: %s", value, exc)
        return []


def _apply_rule(document: Document, rule: StyleRule, style_map: StyleMap) -> None:
    style = rule.style
    info = computed_font_info(style)
    if not info:
        return
    content = style.get_property_value("content")

    for selector in split_selectors(rule.selector_text):
        style_map.rule_selectors.append((selector, info))
        nodes = select_nodes(document, element_selector(selector))

        kind = pseudo_element(selector)
        if kind and content:
            tokens = _content_tokens(content)
            for node in nodes:
                text = render_content(tokens, node.get_attribute)
                style_map.attach_pseudo(node, PseudoNode(f"::{kind}", info, text))

        for node in nodes:
            style_map.merge(node, info)


def _apply_inline_styles(document: Document, style_map: StyleMap, selector_text: str) -> None:
    for selector in split_selectors(selector_text):
        for node in select_nodes(document, selector):
            style = node.inline_style
            if style is None:
                continue
            info = computed_font_info(style)
            if info:
                style_map.merge(node, info)


def walk_cascade(document: Document, config: SpiderConfig | None = None) -> StyleMap:
    """Resolve explicit font state for every node a font rule reaches.

    Style rules are applied first, in document order, then inline ``style``
    attributes, so inline declarations layer over rule declarations.
    """
    config = config or SpiderConfig()
    style_map = StyleMap()
    for rule in document.rules():
        if isinstance(rule, StyleRule):
            _apply_rule(document, rule, style_map)
    _apply_inline_styles(document, style_map, config.inline_style_selector)
    logger.debug(
        "Cascade styled %d node(s) from %d selector(s)",
        len(style_map),
        len(style_map.rule_selectors),
    )
    return style_map
