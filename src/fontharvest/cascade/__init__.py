"""Cascade and inheritance of font state over a document tree."""

from fontharvest.cascade.propagate import effective_info, inherit, propagate
from fontharvest.cascade.walker import StyleMap, split_selectors, walk_cascade

__all__ = [
    "StyleMap",
    "split_selectors",
    "walk_cascade",
    "inherit",
    "effective_info",
    "propagate",
]
