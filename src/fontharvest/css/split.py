"""Comma splitting that leaves quoted substrings intact."""

from __future__ import annotations

__all__ = ["split_list", "read_quoted"]

_QUOTES = "\"'"


def read_quoted(text: str, start: int) -> int:
    """Return the index just past the quoted string opening at *start*.

    A backslash escapes the following character. An unterminated string
    runs to the end of *text*.
    """
    quote = text[start]
    index = start + 1
    length = len(text)
    while index < length:
        char = text[index]
        if char == "\\":
            index += 2
            continue
        index += 1
        if char == quote:
            break
    return min(index, length)


def split_list(text: str) -> list[str]:
    """Split *text* on commas that are not inside quotes.

    Pieces are returned untrimmed:

        >>> split_list('a[data-x="1,2"], b')
        ['a[data-x="1,2"]', ' b']
    """
    pieces: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == ",":
            pieces.append("")
            index += 1
            continue
        if char in _QUOTES:
            end = read_quoted(text, index)
        else:
            end = index + 1
        if not pieces:
            pieces.append("")
        pieces[-1] += text[index:end]
        index = end
    return pieces
