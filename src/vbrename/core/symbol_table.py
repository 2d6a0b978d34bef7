"""Symbol schema for analysed VB6 projects.

A ``SymbolEntry`` describes one named entity discovered by the parser
(variable, constant, type, field, enum value, control, procedure, parameter,
...), the name it should have under the project's naming rules, and the
``ReferenceList`` of every place it is used. ``SymbolTable`` keeps the entries
of a project, keyed case-insensitively as VB6 names are.

Example:
    >>> table = SymbolTable()
    >>> entry = table.get_or_create("Module1", "Total", "variable",
    ...                             conventional_name="gdblTotal")
    >>> entry.references.record("Form1", "cmdOk_Click", 42, 1, 8)
    >>> [e.name for e in table.renames()]
    ['Total']
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from vbrename.core.references import ReferenceList
from vbrename.utils.logger import get_logger

logger = get_logger("vbrename.core.symbol_table")

# Valid symbol kinds
VALID_SYMBOL_KINDS = {
    "module",
    "variable",
    "constant",
    "type",
    "field",
    "enum",
    "enum_value",
    "control",
    "procedure",
    "parameter",
    "property",
    "event",
}


@dataclass
class SymbolEntry:
    """One named entity and its usages.

    Attributes:
        name: Name as declared
        kind: One of ``VALID_SYMBOL_KINDS``
        module: Module declaring the symbol
        procedure: Declaring routine for locals and parameters, else None
        conventional_name: Name under the naming rules; defaults to ``name``
        line_number: Declaration line, internal bookkeeping only
        references: Usages recorded for the symbol
    """
    name: str
    kind: str
    module: str
    procedure: str | None = None
    conventional_name: str | None = None
    line_number: int = 0
    references: ReferenceList = field(default_factory=ReferenceList, compare=False)

    def __post_init__(self) -> None:
        if self.kind not in VALID_SYMBOL_KINDS:
            raise ValueError(
                f"Invalid kind: {self.kind}. Must be one of {sorted(VALID_SYMBOL_KINDS)}"
            )
        if self.conventional_name is None:
            self.conventional_name = self.name

    @property
    def is_conventional(self) -> bool:
        return self.name == self.conventional_name

    @property
    def needs_rename(self) -> bool:
        return not self.is_conventional

    @property
    def key(self) -> tuple[str, str, str, str]:
        return _make_key(self.module, self.procedure, self.name, self.kind)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for reports; ``line_number`` is internal and omitted."""
        return {
            "name": self.name,
            "conventional_name": self.conventional_name,
            "is_conventional": self.is_conventional,
            "kind": self.kind,
            "module": self.module,
            "procedure": self.procedure or "",
            "references": self.references.to_list(),
        }


def _make_key(module: str, procedure: str | None, name: str, kind: str) -> tuple[str, str, str, str]:
    return (module.casefold(), (procedure or "").casefold(), name.casefold(), kind)


class SymbolTable:
    """Thread-safe registry of the symbols of one project."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._symbols: dict[tuple[str, str, str, str], SymbolEntry] = {}

    def add(self, entry: SymbolEntry) -> SymbolEntry:
        """Add ``entry`` unless an equivalent one exists; return the stored one."""
        with self._lock:
            existing = self._symbols.get(entry.key)
            if existing is not None:
                return existing
            self._symbols[entry.key] = entry

        logger.debug(
            f"Added symbol: {entry.module}.{entry.name} ({entry.kind})"
            + ("" if entry.is_conventional else f" -> {entry.conventional_name}")
        )
        return entry

    def get(
        self,
        module: str,
        name: str,
        kind: str,
        procedure: str | None = None,
    ) -> SymbolEntry | None:
        with self._lock:
            return self._symbols.get(_make_key(module, procedure, name, kind))

    def get_or_create(
        self,
        module: str,
        name: str,
        kind: str,
        procedure: str | None = None,
        conventional_name: str | None = None,
        line_number: int = 0,
    ) -> SymbolEntry:
        """Return the entry for the symbol, creating it on first use."""
        existing = self.get(module, name, kind, procedure)
        if existing is not None:
            return existing
        return self.add(
            SymbolEntry(
                name=name,
                kind=kind,
                module=module,
                procedure=procedure,
                conventional_name=conventional_name,
                line_number=line_number,
            )
        )

    def entries(self) -> list[SymbolEntry]:
        """All entries in insertion order."""
        with self._lock:
            return list(self._symbols.values())

    def renames(self) -> list[SymbolEntry]:
        """Entries whose name differs from their conventional name."""
        return [entry for entry in self.entries() if entry.needs_rename]

    def to_dict(self) -> dict[str, Any]:
        entries = self.entries()
        return {
            "symbol_count": len(entries),
            "symbols": [entry.to_dict() for entry in entries],
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._symbols)
