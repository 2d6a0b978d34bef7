"""
Selection of the matches a rename should rewrite on one line.

The planner combines whole-word token location with string-literal
classification and occurrence selection. It only decides *which* matches are
eligible; turning them into edit records and deduplicating them is the job of
``vbrename.core.replacements.ReplacementStore``.

Example:
    >>> line = "Sub Foo(a As Total, b As Total)"
    >>> select_matches(line, "Total", "TotalT", occurrence_index=2)
    [TokenMatch(start=25, end=30, text='Total')]
"""

from __future__ import annotations

from vbrename.processors.token_locator import (
    TokenMatch,
    find_word_matches,
    is_inside_ranges,
    string_literal_ranges,
)

# Sentinel occurrence index: rewrite every eligible match on the line
ALL_OCCURRENCES = -1


def select_matches(
    line: str,
    old_name: str,
    new_name: str,
    occurrence_index: int = ALL_OCCURRENCES,
    skip_string_literals: bool = False,
) -> list[TokenMatch]:
    """Return the matches of ``old_name`` that a rename should rewrite.

    Args:
        line: Source line (or its code part) to scan
        old_name: Current name of the symbol
        new_name: Target name; identical (case-sensitive) names select nothing
        occurrence_index: 1-based rank among the eligible matches, or
            ``ALL_OCCURRENCES``
        skip_string_literals: Drop matches starting inside a closed literal

    Returns:
        The selected matches in left-to-right order. An out-of-range
        occurrence index selects nothing.
    """
    if old_name == new_name:
        return []

    matches = find_word_matches(line, old_name)
    if skip_string_literals and matches:
        ranges = string_literal_ranges(line)
        if ranges:
            matches = [m for m in matches if not is_inside_ranges(m.start, ranges)]

    if not matches:
        return []

    if occurrence_index > 0:
        if occurrence_index > len(matches):
            return []
        return [matches[occurrence_index - 1]]

    return matches
