"""Core reference registry, replacement store and engine.

Classes:
    RenameConfig: Run configuration
    SymbolReference: Usages of a symbol inside one (module, procedure) pair
    ReferenceList: Thread-safe per-symbol collection of SymbolReference
    LineReplace: One position-exact text substitution
    ReplacementStore: Thread-safe per-module collection of LineReplace
    SymbolEntry: One named entity of the analysed project
    SymbolTable: Registry of SymbolEntry
    RenameEngine: Facade routing usages and rename requests
"""

from vbrename.core.config import RenameConfig
from vbrename.core.engine import RenameEngine, StartCharCheck
from vbrename.core.references import (
    UNSPECIFIED_OCCURRENCE,
    UNSPECIFIED_START_CHAR,
    ReferenceList,
    SymbolReference,
)
from vbrename.core.replacements import (
    LineReplace,
    ReplacementStore,
    apply_replaces,
    sort_for_application,
)
from vbrename.core.symbol_table import VALID_SYMBOL_KINDS, SymbolEntry, SymbolTable

__all__ = [
    "RenameConfig",
    "RenameEngine",
    "StartCharCheck",
    "UNSPECIFIED_OCCURRENCE",
    "UNSPECIFIED_START_CHAR",
    "ReferenceList",
    "SymbolReference",
    "LineReplace",
    "ReplacementStore",
    "apply_replaces",
    "sort_for_application",
    "VALID_SYMBOL_KINDS",
    "SymbolEntry",
    "SymbolTable",
]
