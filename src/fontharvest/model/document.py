"""Protocols a document model provider implements for the spider.

The spider never parses HTML or CSS itself. A provider hands it a node tree,
the flattened list of CSS rules (``@import`` and ``@media`` already expanded)
and a selector query.
"""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence, Union, runtime_checkable


class StyleDeclaration(Protocol):
    """A CSS declaration block."""

    @property
    def property_names(self) -> Sequence[str]:
        """Declared property names in source order."""
        ...

    def get_property_value(self, name: str) -> str:
        """Value of *name*, or an empty string when it is not declared."""
        ...

    def is_important(self, name: str) -> bool: ...


@runtime_checkable
class FontFaceRule(Protocol):
    """An ``@font-face`` rule and the location its URLs resolve against."""

    @property
    def style(self) -> StyleDeclaration: ...

    @property
    def base_url(self) -> str: ...


@runtime_checkable
class StyleRule(Protocol):
    """A plain ``selector { declarations }`` rule."""

    @property
    def selector_text(self) -> str: ...

    @property
    def style(self) -> StyleDeclaration: ...


CSSRule = Union[FontFaceRule, StyleRule]


class Node(Protocol):
    """An element of the document tree."""

    @property
    def tag_name(self) -> str | None: ...

    @property
    def children(self) -> Sequence[Node]: ...

    @property
    def text_content(self) -> str: ...

    def get_attribute(self, name: str) -> str | None: ...

    @property
    def inline_style(self) -> StyleDeclaration | None: ...


class Document(Protocol):
    """A parsed document with its style sheets."""

    @property
    def url(self) -> str: ...

    @property
    def root(self) -> Node: ...

    def rules(self) -> Iterable[CSSRule]: ...

    def select(self, selector: str) -> list[Node]:
        """Return matching nodes in document order.

        Raises :class:`fontharvest.errors.UnsupportedSelectorError` when the
        selector cannot be evaluated.
        """
        ...
