"""
Token location for single lines of VB6 source.

This module finds the exact character ranges of whole-word occurrences of a
name on one line, and classifies the quoted string literals of that line so
callers can ignore matches that sit inside text. VB6 escapes a quote inside a
literal by doubling it (``"He said ""Hi"" twice"``) and starts comments with an
apostrophe outside any literal.

Example:
    >>> line = 'Debug.Print "Total" & Total'
    >>> find_word_matches(line, "Total")
    [TokenMatch(start=13, end=18, text='Total'), TokenMatch(start=22, end=27, text='Total')]
    >>> string_literal_ranges(line)
    [StringRange(start=12, end=19)]
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

QUOTE = '"'
COMMENT_MARKER = "'"


@dataclass(frozen=True)
class TokenMatch:
    """A whole-word match of a name on one line.

    Attributes:
        start: 0-based column of the first matched character
        end: 0-based column one past the last matched character
        text: The matched text as written in the source (original casing)
    """
    start: int
    end: int
    text: str


@dataclass(frozen=True)
class StringRange:
    """Half-open column range ``[start, end)`` of one quoted literal."""
    start: int
    end: int

    def contains(self, column: int) -> bool:
        return self.start <= column < self.end


@lru_cache(maxsize=1024)
def _word_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(name)}\b", re.IGNORECASE)


def find_word_matches(line: str, name: str) -> list[TokenMatch]:
    """Locate every whole-word occurrence of ``name`` in ``line``.

    Matching is case-insensitive and bounded by identifier/non-identifier
    transitions. Matches are returned left to right and never overlap.

    Args:
        line: One line of source text
        name: The identifier to look for

    Returns:
        Ordered list of matches, empty when there is none or ``name`` is empty
    """
    if not line or not name:
        return []

    return [
        TokenMatch(match.start(), match.end(), match.group(0))
        for match in _word_pattern(name).finditer(line)
    ]


def string_literal_ranges(line: str) -> list[StringRange]:
    """Return the ranges of the closed string literals on ``line``.

    A doubled quote inside a literal is an escaped quote and does not close
    it. A literal still open at the end of the line yields no range.
    """
    ranges: list[StringRange] = []
    in_string = False
    start = 0
    i = 0
    length = len(line)

    while i < length:
        if line[i] == QUOTE:
            if not in_string:
                in_string = True
                start = i
            elif i + 1 < length and line[i + 1] == QUOTE:
                i += 1
            else:
                in_string = False
                ranges.append(StringRange(start, i + 1))
        i += 1

    return ranges


def is_inside_ranges(column: int, ranges: Iterable[StringRange]) -> bool:
    """Check whether ``column`` falls inside any of ``ranges``."""
    return any(r.contains(column) for r in ranges)


def split_code_and_comment(line: str) -> tuple[str, str]:
    """Split a line into its code part and its trailing comment.

    The first apostrophe outside a string literal starts the comment. The
    code part keeps its original column offsets; only trailing whitespace
    before the comment is removed.

    Returns:
        ``(code, comment)``, where ``comment`` includes the apostrophe, or
        ``(line, "")`` when the line has no comment
    """
    in_string = False
    i = 0
    length = len(line)

    while i < length:
        ch = line[i]
        if ch == QUOTE:
            if not in_string:
                in_string = True
            elif i + 1 < length and line[i + 1] == QUOTE:
                i += 1
            else:
                in_string = False
        elif ch == COMMENT_MARKER and not in_string:
            return line[:i].rstrip(), line[i:]
        i += 1

    return line, ""
