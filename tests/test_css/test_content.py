"""Tests for the CSS ``content`` value parser."""

import pytest

from fontharvest.css.content import (
    ContentToken,
    Token,
    parse_content,
    render_content,
    tokenize_content,
    unescape_string,
)
from fontharvest.errors import ContentSyntaxError


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


class TestTokenizer:
    def test_symbols_words_and_strings(self):
        tokens = tokenize_content('"a" attr(x)')
        assert [(t.type, t.value) for t in tokens] == [
            ("string", '"a"'),
            ("word", "attr"),
            ("symbol", "("),
            ("word", "x"),
            ("symbol", ")"),
        ]

    def test_whitespace_is_skipped(self):
        assert tokenize_content("   \t\n") == []

    def test_string_keeps_escapes_and_quotes(self):
        tokens = tokenize_content(r"'it\'s'")
        assert tokens == [Token("string", r"'it\'s'", 0)]

    def test_slash_and_comma_are_symbols(self):
        tokens = tokenize_content("a / b, c")
        assert [t.type for t in tokens] == ["word", "symbol", "word", "symbol", "word"]

    def test_unexpected_character_raises(self):
        with pytest.raises(ContentSyntaxError) as exc_info:
            tokenize_content('"a" \\ "b"')
        assert exc_info.value.position == 4


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TestParseContent:
    def test_string_and_attr(self):
        assert parse_content('"Pg. " attr(data-page)') == [
            ContentToken("string", "Pg. "),
            ContentToken("attr", "data-page"),
        ]

    def test_with_property_name_prefix(self):
        assert parse_content('content: "Pg. " attr(data-page)') == [
            ContentToken("string", "Pg. "),
            ContentToken("attr", "data-page"),
        ]

    def test_unclosed_attr_raises(self):
        with pytest.raises(ContentSyntaxError):
            parse_content("content: attr(")

    def test_attr_without_paren_raises(self):
        with pytest.raises(ContentSyntaxError):
            parse_content("attr x")

    def test_attr_with_string_argument_raises(self):
        with pytest.raises(ContentSyntaxError):
            parse_content('attr("x")')

    def test_attr_is_case_insensitive(self):
        assert parse_content("ATTR(title)") == [ContentToken("attr", "title")]

    def test_escaped_quote_in_string(self):
        assert parse_content(r'"say \"hi\""') == [ContentToken("string", 'say "hi"')]

    def test_other_words_are_skipped(self):
        assert parse_content('open-quote "x" counter(item)') == [
            ContentToken("string", "x")
        ]

    def test_empty_string(self):
        assert parse_content('""') == [ContentToken("string", "")]

    def test_none_keyword(self):
        assert parse_content("none") == []


class TestUnescapeString:
    def test_strips_outer_quotes(self):
        assert unescape_string("'abc'") == "abc"

    def test_backslash_escapes_next_char(self):
        assert unescape_string(r'"a\\b"') == "a\\b"


class TestRenderContent:
    def test_resolves_attributes(self):
        tokens = parse_content('"#" attr(data-n) "."')
        assert render_content(tokens, {"data-n": "7"}.get) == "#7."

    def test_missing_attribute_renders_empty(self):
        tokens = parse_content("attr(title)")
        assert render_content(tokens, {}.get) == ""
