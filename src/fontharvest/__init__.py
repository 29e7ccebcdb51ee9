"""fontharvest: find the characters each web font of a page must render.

Walks rendered HTML documents and their style sheets, resolves every
element's font-family/style/weight through the cascade and inheritance,
matches it against the page's ``@font-face`` rules with CSS fallback
semantics and collects the characters each font face has to cover.

Example:
    >>> from fontharvest import HtmlDocument, spider
    >>> fonts = spider(HtmlDocument.from_file("index.html"))
    >>> [(f.family, "".join(sorted(f.chars))) for f in fonts]
"""

from fontharvest.config import SpiderConfig
from fontharvest.errors import ContentSyntaxError, FontHarvestError, UnsupportedSelectorError
from fontharvest.html import HtmlDocument
from fontharvest.model import FontFile, FontInfo, WebFont
from fontharvest.spider import spider, spider_documents

__version__ = "0.1.0"

__all__ = [
    # Main API
    "spider",
    "spider_documents",
    "SpiderConfig",
    "HtmlDocument",
    # Model
    "WebFont",
    "FontFile",
    "FontInfo",
    # Exceptions
    "FontHarvestError",
    "ContentSyntaxError",
    "UnsupportedSelectorError",
    # Metadata
    "__version__",
]
