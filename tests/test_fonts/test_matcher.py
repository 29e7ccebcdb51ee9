"""Tests for the font fallback matcher."""

import pytest

from fontharvest.fonts.matcher import (
    font_weight_value,
    harvest,
    match_font_style,
    match_web_fonts,
    rank_web_fonts,
    style_rank,
    weight_distance,
)
from fontharvest.model.fontinfo import FontInfo
from fontharvest.model.webfont import FontFile, WebFont


def _face(family: str, style: str = "normal", weight: str = "400", name: str = "") -> WebFont:
    url = name or f"{family}-{style}-{weight}.woff2"
    return WebFont.create(family, [FontFile(url, "woff2")], style=style, weight=weight)


def _info(*families: str, style: str = "normal", weight: str = "normal") -> FontInfo:
    return FontInfo(family=tuple(f'"{f}"' for f in families), style=style, weight=weight)


# ---------------------------------------------------------------------------
# Weight
# ---------------------------------------------------------------------------


class TestFontWeightValue:
    @pytest.mark.parametrize(
        "weight, expected",
        [("normal", 400), ("bold", 700), ("300", 300), (" 650 ", 650), ("", 400), (None, 400), ("heavy", 400)],
    )
    def test_values(self, weight, expected):
        assert font_weight_value(weight) == expected

    def test_range_gives_lower_bound(self):
        assert font_weight_value("100 900") == 100


class TestWeightDistance:
    def test_exact_is_zero(self):
        assert weight_distance("bold", "700") == 0

    def test_inside_400_500_prefers_up_to_500(self):
        assert weight_distance("450", "500") < weight_distance("450", "300")

    def test_inside_400_500_prefers_below_over_above_500(self):
        assert weight_distance("450", "400") < weight_distance("450", "600")

    def test_below_400_prefers_lighter(self):
        assert weight_distance("300", "200") < weight_distance("300", "500")

    def test_above_500_prefers_heavier(self):
        assert weight_distance("600", "800") < weight_distance("600", "500")

    def test_closer_wins_inside_bucket(self):
        assert weight_distance("300", "200") < weight_distance("300", "100")
        assert weight_distance("700", "800") < weight_distance("700", "900")

    def test_boundary_400(self):
        # 400 uses the [400, 500] rule: 500 is nearer than 300
        assert weight_distance("400", "500") < weight_distance("400", "300")

    def test_boundary_500(self):
        assert weight_distance("500", "400") < weight_distance("500", "600")

    def test_range_containing_weight(self):
        assert weight_distance("bold", "100 900") == 0


# ---------------------------------------------------------------------------
# Style
# ---------------------------------------------------------------------------


class TestStyle:
    @pytest.mark.parametrize(
        "desired, declared, rank",
        [
            ("normal", "normal", 0),
            ("normal", "oblique", 1),
            ("normal", "italic", 2),
            ("italic", "oblique", 1),
            ("oblique", "italic", 1),
            ("italic", "", 2),
        ],
    )
    def test_style_rank(self, desired, declared, rank):
        assert style_rank(desired, declared) == rank

    def test_italic_text_falls_back_to_normal_face(self):
        assert match_font_style(_face("A", style="normal"), _info("A", style="italic"))

    def test_oblique_text_falls_back_to_any_face(self):
        assert match_font_style(_face("A", style="italic"), _info("A", style="oblique"))

    def test_normal_text_rejects_italic_face(self):
        assert not match_font_style(_face("A", style="italic"), _info("A", style="normal"))

    def test_undeclared_face_style_is_normal(self):
        assert match_font_style(_face("A", style=""), _info("A", style="normal"))


# ---------------------------------------------------------------------------
# Ranking and matching
# ---------------------------------------------------------------------------


class TestRankWebFonts:
    def test_family_order_first(self):
        a, b = _face("A"), _face("B")
        assert rank_web_fonts(_info("B", "A"), [a, b]) == [b, a]

    def test_unlisted_families_sort_last(self):
        other, a = _face("Other"), _face("A")
        assert rank_web_fonts(_info("A"), [other, a]) == [a, other]

    def test_style_before_weight(self):
        italic_exact = _face("A", style="italic", weight="400")
        normal_far = _face("A", style="normal", weight="900")
        ranked = rank_web_fonts(_info("A", style="normal"), [italic_exact, normal_far])
        assert ranked == [normal_far, italic_exact]

    def test_weight_boundary_ranking(self):
        w300, w500 = _face("A", weight="300"), _face("A", weight="500")
        assert rank_web_fonts(_info("A", weight="450"), [w300, w500]) == [w500, w300]
        w200 = _face("A", weight="200")
        assert rank_web_fonts(_info("A", weight="300"), [w500, w200]) == [w200, w500]


class TestMatchWebFonts:
    def test_once_per_family(self):
        regular, bold = _face("A", weight="400"), _face("A", weight="700")
        assert list(match_web_fonts(_info("A", weight="bold"), [regular, bold])) == [bold]

    def test_several_families_each_match(self):
        a, b = _face("A"), _face("B")
        assert list(match_web_fonts(_info("A", "B"), [b, a])) == [a, b]

    def test_unlisted_family_never_matches(self):
        assert list(match_web_fonts(_info("A"), [_face("B")])) == []

    def test_upright_face_preferred_over_closer_weight_italic(self):
        italic, normal = _face("A", style="italic", weight="400"), _face("A", style="normal", weight="900")
        assert list(match_web_fonts(_info("A"), [italic, normal])) == [normal]

    def test_generic_family_does_not_match_face_of_same_name(self):
        info = FontInfo(family=("serif",), style="normal", weight="normal")
        assert list(match_web_fonts(info, [_face("serif")])) == []


class TestHarvest:
    def test_adds_chars_to_matched_fonts_only(self):
        regular, bold, other = _face("A"), _face("A", weight="700"), _face("B")
        matched = harvest("Hi", _info("A"), [regular, bold, other])
        assert matched == [regular]
        assert regular.chars == {"H", "i"}
        assert bold.chars == set()
        assert other.chars == set()

    def test_italic_text_uses_normal_face(self):
        face = _face("A")
        harvest("x", _info("A", style="italic"), [face])
        assert face.chars == {"x"}

    def test_normal_text_skips_italic_only_family(self):
        face = _face("A", style="italic")
        harvest("x", _info("A"), [face])
        assert face.chars == set()
