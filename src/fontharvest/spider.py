"""Spider: find the characters each web font of a document has to render."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Union

from fontharvest.cascade.propagate import propagate
from fontharvest.cascade.walker import StyleMap, walk_cascade
from fontharvest.config import SpiderConfig
from fontharvest.fonts.extract import extract_web_fonts
from fontharvest.model.document import Document
from fontharvest.model.webfont import WebFont

__all__ = ["DocumentSource", "attribute_selectors", "spider", "spider_documents"]

logger = logging.getLogger(__name__)

DocumentSource = Union[Document, Callable[[], Document]]


def attribute_selectors(web_fonts: list[WebFont], style_map: StyleMap) -> None:
    """Record on each font the selectors whose rules list its family."""
    for selector, info in style_map.rule_selectors:
        for web_font in web_fonts:
            if info.has_family(web_font.family):
                web_font.add_selector(selector)


def spider(document: Document, config: SpiderConfig | None = None) -> list[WebFont]:
    """Run the full font usage analysis over one document.

    Returns a fresh WebFont per usable ``@font-face`` rule with the
    characters and selectors that use it. Fonts served only as ``data:``
    URIs are dropped unless ``config.ignore_inline_fonts`` is false.
    """
    config = config or SpiderConfig()
    web_fonts = extract_web_fonts(document)
    if not web_fonts:
        logger.debug("No @font-face rules in %s", document.url)
        return web_fonts

    style_map = walk_cascade(document, config)
    attribute_selectors(web_fonts, style_map)
    propagate(document.root, style_map, web_fonts, config)

    if config.ignore_inline_fonts:
        web_fonts = [web_font for web_font in web_fonts if not web_font.is_inline]

    logger.debug(
        "Spidered %s: %s",
        document.url,
        ", ".join(f"{wf.family}={len(wf.chars)}" for wf in web_fonts) or "no fonts",
    )
    return web_fonts


def spider_documents(
    sources: Iterable[DocumentSource],
    config: SpiderConfig | None = None,
    max_workers: int | None = None,
) -> list[list[WebFont]]:
    """Spider several documents concurrently, one thread per document.

    A source is either a document or a zero-argument callable building one,
    so model construction also runs in the worker. Results keep the input
    order; merging them is up to the caller. The first failure is raised.
    """
    config = config or SpiderConfig()
    items = list(sources)
    if not items:
        return []

    def _run(source: DocumentSource) -> list[WebFont]:
        document = source() if callable(source) else source
        return spider(document, config)

    workers = max(1, min(max_workers or config.max_workers, len(items)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(_run, items))
