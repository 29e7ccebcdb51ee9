"""Error hierarchy for fontharvest."""

from __future__ import annotations


class FontHarvestError(Exception):
    """Base error for all fontharvest errors."""


class ContentSyntaxError(FontHarvestError):
    """Raised when a CSS ``content`` value cannot be tokenized or parsed."""

    def __init__(self, message: str, position: int | None = None) -> None:
        self.position = position
        super().__init__(message)


class UnsupportedSelectorError(FontHarvestError):
    """Raised by a document provider when it cannot evaluate a selector."""

    def __init__(self, selector: str, *, cause: Exception | None = None) -> None:
        self.selector = selector
        self.cause = cause
        super().__init__(f"Unsupported selector: {selector!r}")
