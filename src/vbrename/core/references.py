"""Per-symbol usage registry.

Every tracked symbol owns one ``ReferenceList``: an ordered collection of
``SymbolReference`` records, one per (module, procedure) pair that uses the
symbol. Each record stores its usages as three parallel sequences
(line numbers, occurrence indexes, start columns) that always grow together.

The list is safe to share between worker threads. A single lock owned by the
list guards the whole lookup-or-create, duplicate check and append sequence,
so two threads recording the same usage never produce two entries and a
reader never sees a partially appended triple.

Example:
    >>> refs = ReferenceList()
    >>> refs.record("Module1", "Main", 12, occurrence_index=1, start_char=4)
    >>> refs.record("module1", "MAIN", 12, occurrence_index=1, start_char=4)
    >>> refs.snapshot()[0].line_numbers
    [12]
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Iterator

from vbrename.utils.logger import get_logger

logger = get_logger("vbrename.core.references")

# Sentinel values for positions the caller could not determine
UNSPECIFIED_OCCURRENCE = -1
UNSPECIFIED_START_CHAR = -1


def _same_name(left: str, right: str) -> bool:
    return left.casefold() == right.casefold()


@dataclass
class SymbolReference:
    """Usages of one symbol inside one (module, procedure) pair.

    Attributes:
        module: Name of the source module containing the usages
        procedure: Enclosing routine, or "" for module-level code
        line_numbers: 1-based source lines
        occurrence_indexes: 1-based rank among same-name matches on the line,
            or ``UNSPECIFIED_OCCURRENCE``
        start_chars: 0-based start column of the match, or
            ``UNSPECIFIED_START_CHAR``
    """
    module: str
    procedure: str = ""
    line_numbers: list[int] = field(default_factory=list)
    occurrence_indexes: list[int] = field(default_factory=list)
    start_chars: list[int] = field(default_factory=list)

    def matches(self, module: str, procedure: str) -> bool:
        """Case-insensitive identity check on (module, procedure)."""
        return _same_name(self.module, module) and _same_name(self.procedure or "", procedure)

    def positions(self) -> Iterator[tuple[int, int, int]]:
        """Iterate the recorded (line, occurrence, start char) triples."""
        return zip(self.line_numbers, self.occurrence_indexes, self.start_chars)

    def _align(self) -> None:
        # Trailing sequences are cut or filled to the length of line_numbers
        target = len(self.line_numbers)
        del self.occurrence_indexes[target:]
        del self.start_chars[target:]
        if len(self.occurrence_indexes) < target:
            self.occurrence_indexes.extend(
                [UNSPECIFIED_OCCURRENCE] * (target - len(self.occurrence_indexes))
            )
        if len(self.start_chars) < target:
            self.start_chars.extend(
                [UNSPECIFIED_START_CHAR] * (target - len(self.start_chars))
            )

    def _has(self, line_number: int, occurrence_index: int, start_char: int) -> bool:
        return (line_number, occurrence_index, start_char) in self.positions()

    def _append(self, line_number: int, occurrence_index: int, start_char: int) -> None:
        self.line_numbers.append(line_number)
        self.occurrence_indexes.append(occurrence_index)
        self.start_chars.append(start_char)

    def copy(self) -> SymbolReference:
        return SymbolReference(
            module=self.module,
            procedure=self.procedure,
            line_numbers=list(self.line_numbers),
            occurrence_indexes=list(self.occurrence_indexes),
            start_chars=list(self.start_chars),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with a stable field order for reports and diffs."""
        return {
            "module": self.module,
            "procedure": self.procedure,
            "line_numbers": list(self.line_numbers),
            "occurrence_indexes": list(self.occurrence_indexes),
            "start_chars": list(self.start_chars),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SymbolReference:
        """Load a record, aligning its position sequences on ``line_numbers``.

        Extra occurrence indexes or start columns are dropped and missing ones
        are filled with the unspecified sentinels.

        Raises:
            KeyError: If the module name is missing
        """
        try:
            ref = cls(
                module=data["module"],
                procedure=data.get("procedure") or "",
                line_numbers=list(data.get("line_numbers", [])),
                occurrence_indexes=list(data.get("occurrence_indexes", [])),
                start_chars=list(data.get("start_chars", [])),
            )
        except KeyError as e:
            raise KeyError(f"Missing required field in reference: {e}")
        ref._align()
        return ref


class ReferenceList:
    """Thread-safe, insertion-ordered collection of ``SymbolReference``.

    Records are created lazily on the first usage of a (module, procedure)
    pair and only ever grow. Readers get copies through ``snapshot`` so a
    record is never observed mid-mutation.
    """

    def __init__(self, references: list[SymbolReference] | None = None) -> None:
        self._lock = threading.Lock()
        self._references: list[SymbolReference] = []
        for ref in references or []:
            ref = ref.copy()
            ref._align()
            self._references.append(ref)

    def record(
        self,
        module: str,
        procedure: str | None,
        line_number: int,
        occurrence_index: int = UNSPECIFIED_OCCURRENCE,
        start_char: int = UNSPECIFIED_START_CHAR,
    ) -> None:
        """Record one usage of the symbol.

        The (module, procedure) record is created if missing. A non-positive
        ``line_number`` creates the record but adds no position, and a
        triple already present on the record is not added again.

        Args:
            module: Module containing the usage
            procedure: Enclosing routine; ``None`` means module-level code
            line_number: 1-based source line
            occurrence_index: 1-based rank among same-name matches on the line
            start_char: 0-based start column of the usage
        """
        procedure = procedure or ""

        with self._lock:
            ref = self._find(module, procedure)
            if ref is None:
                ref = SymbolReference(module=module, procedure=procedure)
                self._references.append(ref)
                logger.debug(f"Reference record created for {module}.{procedure or '<module>'}")

            if line_number <= 0:
                return

            ref._align()
            if ref._has(line_number, occurrence_index, start_char):
                logger.debug(
                    f"Duplicate usage ignored: {module}.{procedure or '<module>'} "
                    f"line {line_number} occurrence {occurrence_index} col {start_char}"
                )
                return

            ref._append(line_number, occurrence_index, start_char)

    def _find(self, module: str, procedure: str) -> SymbolReference | None:
        for ref in self._references:
            if ref.matches(module, procedure):
                return ref
        return None

    def get(self, module: str, procedure: str | None = None) -> SymbolReference | None:
        """Return a copy of the record for (module, procedure), if any."""
        with self._lock:
            ref = self._find(module, procedure or "")
            return ref.copy() if ref is not None else None

    def snapshot(self) -> list[SymbolReference]:
        """Return copies of all records in insertion order."""
        with self._lock:
            return [ref.copy() for ref in self._references]

    def lines_in_module(self, module: str) -> list[int]:
        """Distinct line numbers used in ``module`` across all procedures."""
        with self._lock:
            lines: list[int] = []
            seen: set[int] = set()
            for ref in self._references:
                if not _same_name(ref.module, module):
                    continue
                for ln in ref.line_numbers:
                    if ln not in seen:
                        seen.add(ln)
                        lines.append(ln)
            return lines

    def to_list(self) -> list[dict[str, Any]]:
        return [ref.to_dict() for ref in self.snapshot()]

    @classmethod
    def from_list(cls, data: list[dict[str, Any]]) -> ReferenceList:
        return cls([SymbolReference.from_dict(item) for item in data])

    def __len__(self) -> int:
        with self._lock:
            return len(self._references)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __iter__(self) -> Iterator[SymbolReference]:
        return iter(self.snapshot())
