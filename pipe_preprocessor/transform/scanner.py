"""Depth- and quote-aware splitting shared by the locator and chain parser."""

from __future__ import annotations

_OPENERS = "([{"
_CLOSERS = ")]}"
_QUOTES = "\"'"


def split_top_level(text: str, separator: str, maxsplit: int = -1) -> list[str]:
    """Split *text* on *separator* where it is outside quotes and brackets.

    Pieces are returned untrimmed, so ``separator.join(pieces) == text``.
    Inside a string a backslash escapes the next character, and only the
    quote character that opened the string closes it. Unbalanced input is
    not an error: the scan runs to the end and returns what it has. A stray
    closing bracket never takes the depth below zero.
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    escaped = False

    for ch in text:
        if quote is not None:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue

        if ch in _QUOTES:
            quote = ch
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(depth - 1, 0)
        elif ch == separator and depth == 0 and (maxsplit < 0 or len(parts) < maxsplit):
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)

    parts.append("".join(current))
    return parts
