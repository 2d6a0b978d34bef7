"""Rename engine facade.

``RenameEngine`` is the in-process entry point used by the symbol resolver.
It routes usage facts to the ``ReferenceList`` of the symbol they concern and
rename requests to the ``ReplacementStore`` of the module being edited,
creating stores lazily. Workers analysing different modules of the same
project may call it concurrently: the engine lock only covers the store
lookup-or-create and is released before the store itself is touched.

Degenerate requests (non-positive lines, duplicate usages or positions,
identity renames, out-of-range occurrence indexes, lines with no match) are
silently absorbed; an empty plan is a normal outcome.

Example:
    >>> engine = RenameEngine()
    >>> total = engine.symbols.get_or_create("Module1", "Total", "variable",
    ...                                      conventional_name="gdblTotal")
    >>> engine.record_usage(total, "Module1", "Main", 3, 1, 4)
    >>> edits = engine.plan_rename(total, "Module1", "    Total = Total + 1", 3,
    ...                            "Total", "gdblTotal", "GlobalVariable_Reference")
    >>> [(e.line_number, e.start_char) for e in engine.ordered_replaces("Module1")]
    [(3, 12), (3, 4)]
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from vbrename.core.config import RenameConfig
from vbrename.core.references import UNSPECIFIED_OCCURRENCE, UNSPECIFIED_START_CHAR
from vbrename.core.replacements import LineReplace, ReplacementStore, sort_for_application
from vbrename.core.symbol_table import SymbolEntry, SymbolTable
from vbrename.processors.replace_planner import ALL_OCCURRENCES
from vbrename.processors.token_locator import split_code_and_comment
from vbrename.utils.logger import get_logger

logger = get_logger("vbrename.core.engine")


@dataclass(frozen=True)
class StartCharCheck:
    """Audit row describing where one planned edit landed."""
    module: str
    procedure: str
    line_number: int
    start_char: int
    occurrence_index: int
    old_name: str
    new_name: str
    category: str


class RenameEngine:
    """Routes usage and rename calls to per-symbol and per-module collections.

    Attributes:
        config: Run configuration
        symbols: Symbol table of the analysed project
    """

    def __init__(
        self,
        config: RenameConfig | None = None,
        symbols: SymbolTable | None = None,
    ) -> None:
        self.config = config or RenameConfig(name="default")
        self.config.validate()
        self.symbols = symbols if symbols is not None else SymbolTable()
        self._lock = threading.Lock()
        self._stores: dict[str, ReplacementStore] = {}
        self._checks: dict[tuple[str, int, int], StartCharCheck] = {}

    # ------------------------------------------------------------------
    # Usage registry
    # ------------------------------------------------------------------

    def record_usage(
        self,
        symbol: SymbolEntry,
        module: str,
        procedure: str | None,
        line_number: int,
        occurrence_index: int = UNSPECIFIED_OCCURRENCE,
        start_char: int = UNSPECIFIED_START_CHAR,
    ) -> None:
        """Record that ``symbol`` is used at the given position."""
        symbol.references.record(module, procedure, line_number, occurrence_index, start_char)

    # ------------------------------------------------------------------
    # Edit planning
    # ------------------------------------------------------------------

    def store_for(self, module: str) -> ReplacementStore:
        """Return the replacement store of ``module``, creating it if needed."""
        key = module.casefold()
        with self._lock:
            store = self._stores.get(key)
            if store is None:
                store = ReplacementStore(module)
                self._stores[key] = store
                logger.debug(f"Replacement store created for module {module}")
        return store

    def plan_rename(
        self,
        symbol: SymbolEntry,
        module: str,
        line_text: str,
        line_number: int,
        old_name: str,
        new_name: str,
        category: str,
        occurrence_index: int = ALL_OCCURRENCES,
        skip_string_literals: bool | None = None,
        procedure: str | None = None,
    ) -> list[LineReplace]:
        """Plan the edits renaming one occurrence (or all) on a line.

        Args:
            symbol: Symbol being renamed
            module: Module whose source contains ``line_text``
            line_text: Full text of the source line
            line_number: 1-based number of the line
            old_name: Name currently written in the source
            new_name: Name to write instead
            category: Tag stored on the produced records
            occurrence_index: 1-based eligible match, or ``ALL_OCCURRENCES``
            skip_string_literals: Ignore matches inside quoted literals;
                ``None`` uses the configured default
            procedure: Enclosing routine, used for the audit report only

        Returns:
            The records newly stored for this call
        """
        if skip_string_literals is None:
            skip_string_literals = self.config.get("skip_string_literals")

        text = line_text
        if self.config.get("strip_comments"):
            text, _ = split_code_and_comment(line_text)

        added = self.store_for(module).add_from_line(
            text,
            line_number,
            old_name,
            new_name,
            category,
            occurrence_index,
            skip_string_literals,
        )

        if added:
            self._record_checks(module, procedure, occurrence_index, added)
        else:
            logger.debug(
                f"No edit planned for {symbol.kind} {symbol.name} "
                f"in {module} line {line_number}"
            )
        return added

    def _record_checks(
        self,
        module: str,
        procedure: str | None,
        occurrence_index: int,
        added: list[LineReplace],
    ) -> None:
        with self._lock:
            for replace in added:
                key = (module.casefold(), replace.line_number, replace.start_char)
                self._checks.setdefault(
                    key,
                    StartCharCheck(
                        module=module,
                        procedure=procedure or "",
                        line_number=replace.line_number,
                        start_char=replace.start_char,
                        occurrence_index=occurrence_index,
                        old_name=replace.old_text,
                        new_name=replace.new_text,
                        category=replace.category,
                    ),
                )

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def modules(self) -> list[str]:
        """Names of the modules that have a replacement store."""
        with self._lock:
            return [store.module for store in self._stores.values()]

    def replaces_for(self, module: str) -> list[LineReplace]:
        """Unordered edits planned for ``module``."""
        with self._lock:
            store = self._stores.get(module.casefold())
        return store.snapshot() if store is not None else []

    def ordered_replaces(self, module: str) -> list[LineReplace]:
        """Edits planned for ``module`` in safe application order."""
        return sort_for_application(self.replaces_for(module))

    def start_char_checks(self) -> list[StartCharCheck]:
        with self._lock:
            return list(self._checks.values())

    def total_replaces(self) -> int:
        with self._lock:
            stores = list(self._stores.values())
        return sum(len(store) for store in stores)
