"""Hand-written parser for the CSS ``content`` property.

Only the forms that can put characters on screen are understood:

    content: "Chapter " attr(data-chapter) ". ";

Quoted strings become ``string`` tokens and ``attr(name)`` becomes an ``attr``
token. Everything else (counters, ``open-quote``, urls) is skipped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from fontharvest.css.split import read_quoted
from fontharvest.errors import ContentSyntaxError

__all__ = [
    "ContentToken",
    "Token",
    "tokenize_content",
    "parse_content",
    "render_content",
    "unescape_string",
]

_SYMBOLS = frozenset("(),/")
_QUOTES = frozenset("\"'")
_WORD_RE = re.compile(r"""[^"'\s(),/\\;{}]+""")
_ATTR_NAME_RE = re.compile(r"^[\w-]*$")
_OUTER_QUOTES_RE = re.compile(r"""(?:^"|"$)|(?:^'|'$)""")


@dataclass(frozen=True)
class Token:
    """A lexical token of a ``content`` value."""

    type: str  # "symbol", "string", "word"
    value: str
    position: int = 0


@dataclass(frozen=True)
class ContentToken:
    """A parsed ``content`` item: literal text or an attribute reference."""

    kind: str  # "string", "attr"
    value: str


def tokenize_content(source: str) -> list[Token]:
    """Split a ``content`` value into symbol, string and word tokens.

    Whitespace is skipped. Raises :class:`ContentSyntaxError` on a character
    that cannot start any token.
    """
    tokens: list[Token] = []
    index = 0
    length = len(source)
    while index < length:
        char = source[index]

        if char in _SYMBOLS:
            tokens.append(Token("symbol", char, index))
            index += 1
            continue

        if char.isspace():
            index += 1
            continue

        if char in _QUOTES:
            end = read_quoted(source, index)
            tokens.append(Token("string", source[index:end], index))
            index = end
            continue

        match = _WORD_RE.match(source, index)
        if match:
            tokens.append(Token("word", match.group(), index))
            index = match.end()
            continue

        raise ContentSyntaxError(f"Unexpected character {char!r}", position=index)

    return tokens


def unescape_string(raw: str) -> str:
    """Strip the outer quotes of a string token and resolve backslashes."""
    body = _OUTER_QUOTES_RE.sub("", raw)
    chars: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\":
            index += 1
            if index < len(body):
                chars.append(body[index])
        else:
            chars.append(char)
        index += 1
    return "".join(chars)


def _expect(tokens: list[Token], index: int, type_: str, value: str | None = None) -> Token:
    if index >= len(tokens):
        raise ContentSyntaxError("Unexpected end of content value in attr()")
    token = tokens[index]
    if token.type != type_ or (value is not None and token.value != value):
        raise ContentSyntaxError(
            f"Unexpected {token.value!r} in attr()", position=token.position
        )
    return token


def parse_content(source: str) -> list[ContentToken]:
    """Parse a ``content`` value into string and attr tokens.

    Raises :class:`ContentSyntaxError` when ``attr`` is not followed by
    ``(identifier)``.
    """
    tokens = tokenize_content(source)
    result: list[ContentToken] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]

        if token.type == "string":
            result.append(ContentToken("string", unescape_string(token.value)))
            index += 1
            continue

        if token.type == "word" and token.value.lower() == "attr":
            _expect(tokens, index + 1, "symbol", "(")
            name = _expect(tokens, index + 2, "word")
            _expect(tokens, index + 3, "symbol", ")")
            if not _ATTR_NAME_RE.match(name.value):
                raise ContentSyntaxError(
                    f"Invalid attribute name {name.value!r}", position=name.position
                )
            result.append(ContentToken("attr", name.value))
            index += 4
            continue

        index += 1

    return result


def render_content(
    tokens: list[ContentToken], get_attribute: Callable[[str], str | None]
) -> str:
    """Concatenate *tokens*, resolving attr tokens with *get_attribute*."""
    parts: list[str] = []
    for token in tokens:
        if token.kind == "string":
            parts.append(token.value)
        elif token.kind == "attr":
            parts.append(get_attribute(token.value) or "")
    return "".join(parts)
