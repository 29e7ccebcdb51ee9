"""Web font descriptors: extraction from ``@font-face`` and fallback matching."""

from fontharvest.fonts.extract import extract_web_fonts, parse_font_face, parse_src
from fontharvest.fonts.matcher import harvest, match_web_fonts, rank_web_fonts, weight_distance

__all__ = [
    "extract_web_fonts",
    "parse_font_face",
    "parse_src",
    "harvest",
    "match_web_fonts",
    "rank_web_fonts",
    "weight_distance",
]
