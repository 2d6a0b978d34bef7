"""Line-level processors: token location and replacement selection."""

from vbrename.processors.replace_planner import ALL_OCCURRENCES, select_matches
from vbrename.processors.token_locator import (
    StringRange,
    TokenMatch,
    find_word_matches,
    is_inside_ranges,
    split_code_and_comment,
    string_literal_ranges,
)

__all__ = [
    "ALL_OCCURRENCES",
    "select_matches",
    "StringRange",
    "TokenMatch",
    "find_word_matches",
    "is_inside_ranges",
    "split_code_and_comment",
    "string_literal_ranges",
]
