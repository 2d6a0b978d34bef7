"""Per-module store of position-exact rename edits.

A ``ReplacementStore`` accumulates the ``LineReplace`` records planned for one
source module. Records are identified by (line number, start column): the
first record submitted at a position wins and later submissions at the same
position are ignored whatever their text or category.

The store does not order its records. Edits must be applied bottom-to-top and,
within a line, right-to-left so every recorded column still refers to
unmodified text when its edit is applied; ``sort_for_application`` produces
that order and ``apply_replaces`` applies it to an in-memory copy of the lines.

Example:
    >>> store = ReplacementStore("Module1")
    >>> store.add_from_line('x = "Total" & Total', 7, "Total", "dblTotal",
    ...                     "Variable_Reference", skip_string_literals=True)
    [LineReplace(line_number=7, start_char=14, end_char=19, old_text='Total', new_text='dblTotal', category='Variable_Reference')]
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Iterable

from vbrename.processors.replace_planner import ALL_OCCURRENCES, select_matches
from vbrename.utils.logger import get_logger

logger = get_logger("vbrename.core.replacements")


@dataclass(frozen=True)
class LineReplace:
    """One single-line text substitution.

    Attributes:
        line_number: 1-based line of the edit
        start_char: 0-based first column replaced
        end_char: 0-based column one past the last replaced character
        old_text: Text currently at ``[start_char, end_char)``
        new_text: Replacement text
        category: Why the edit exists (e.g. "Parameter_Declaration")
    """
    line_number: int
    start_char: int
    end_char: int
    old_text: str
    new_text: str
    category: str = ""

    @property
    def key(self) -> tuple[int, int]:
        return (self.line_number, self.start_char)

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_number": self.line_number,
            "start_char": self.start_char,
            "end_char": self.end_char,
            "old_text": self.old_text,
            "new_text": self.new_text,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LineReplace:
        return cls(
            line_number=data["line_number"],
            start_char=data["start_char"],
            end_char=data["end_char"],
            old_text=data["old_text"],
            new_text=data["new_text"],
            category=data.get("category", ""),
        )


class ReplacementStore:
    """Thread-safe collection of the ``LineReplace`` records of one module."""

    def __init__(self, module: str) -> None:
        self.module = module
        self._lock = threading.Lock()
        self._replaces: list[LineReplace] = []
        self._positions: set[tuple[int, int]] = set()

    def add(
        self,
        line_number: int,
        start_char: int,
        end_char: int,
        old_text: str,
        new_text: str,
        category: str = "",
    ) -> bool:
        """Record an edit unless one already exists at the same position.

        Returns:
            True if the edit was stored, False if the position was taken
        """
        return self._insert(
            LineReplace(line_number, start_char, end_char, old_text, new_text, category)
        )

    def _insert(self, replace: LineReplace) -> bool:
        with self._lock:
            if replace.key in self._positions:
                logger.debug(
                    f"{self.module}: edit at line {replace.line_number} "
                    f"col {replace.start_char} already planned, "
                    f"ignoring {replace.old_text!r} -> {replace.new_text!r}"
                )
                return False
            self._positions.add(replace.key)
            self._replaces.append(replace)
            return True

    def add_from_line(
        self,
        line: str,
        line_number: int,
        old_name: str,
        new_name: str,
        category: str,
        occurrence_index: int = ALL_OCCURRENCES,
        skip_string_literals: bool = False,
    ) -> list[LineReplace]:
        """Plan the edits renaming ``old_name`` on one line and store them.

        Args:
            line: Text of the line (columns must match the source line)
            line_number: 1-based number of the line
            old_name: Current name, matched as a case-insensitive whole word
            new_name: Replacement name
            category: Tag stored on every produced record
            occurrence_index: 1-based eligible match to rewrite, or
                ``ALL_OCCURRENCES``
            skip_string_literals: Ignore matches inside quoted literals

        Returns:
            The records actually stored, in left-to-right order
        """
        matches = select_matches(
            line, old_name, new_name, occurrence_index, skip_string_literals
        )
        added: list[LineReplace] = []
        for match in matches:
            replace = LineReplace(line_number, match.start, match.end, match.text, new_name, category)
            if self._insert(replace):
                added.append(replace)
        return added

    def snapshot(self) -> list[LineReplace]:
        """Return the stored records in insertion order."""
        with self._lock:
            return list(self._replaces)

    def ordered(self) -> list[LineReplace]:
        """Return the stored records in safe application order."""
        return sort_for_application(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._replaces)

    def __contains__(self, position: object) -> bool:
        with self._lock:
            return position in self._positions


def sort_for_application(replaces: Iterable[LineReplace]) -> list[LineReplace]:
    """Order edits by line number, then start column, both descending."""
    return sorted(replaces, key=lambda r: (r.line_number, r.start_char), reverse=True)


def apply_replaces(lines: list[str], replaces: Iterable[LineReplace]) -> list[str]:
    """Apply edits to a copy of ``lines`` in safe application order.

    Edits pointing past the end of the text, or whose recorded range no
    longer holds ``old_text`` (compared case-insensitively), are skipped.

    Args:
        lines: Source lines without line terminators
        replaces: Edits planned against ``lines``

    Returns:
        New list of lines with the edits applied
    """
    result = list(lines)
    for replace in sort_for_application(replaces):
        index = replace.line_number - 1
        if not 0 <= index < len(result) or replace.start_char < 0:
            logger.warning(
                f"Skipping edit {replace.old_text!r} -> {replace.new_text!r}: "
                f"line {replace.line_number} col {replace.start_char} out of range"
            )
            continue

        line = result[index]
        current = line[replace.start_char:replace.end_char]
        if current.casefold() != replace.old_text.casefold():
            logger.warning(
                f"Skipping edit at line {replace.line_number} col {replace.start_char}: "
                f"expected {replace.old_text!r}, found {current!r}"
            )
            continue

        result[index] = line[:replace.start_char] + replace.new_text + line[replace.end_char:]
    return result
