"""Tests for symbol entries and the project symbol table."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from vbrename.core.symbol_table import VALID_SYMBOL_KINDS, SymbolEntry, SymbolTable


# =============================================================================
# SymbolEntry
# =============================================================================


class TestSymbolEntry:

    def test_conventional_name_defaults_to_name(self):
        entry = SymbolEntry(name="gdblTotal", kind="variable", module="Module1")
        assert entry.conventional_name == "gdblTotal"
        assert entry.is_conventional
        assert not entry.needs_rename

    def test_conventional_comparison_is_case_sensitive(self):
        entry = SymbolEntry(
            name="gdbltotal", kind="variable", module="Module1", conventional_name="gdblTotal"
        )
        assert not entry.is_conventional
        assert entry.needs_rename

    def test_invalid_kind(self):
        with pytest.raises(ValueError, match="Invalid kind"):
            SymbolEntry(name="x", kind="macro", module="Module1")

    @pytest.mark.parametrize("kind", sorted(VALID_SYMBOL_KINDS))
    def test_every_valid_kind_accepted(self, kind):
        assert SymbolEntry(name="x", kind=kind, module="Module1").kind == kind

    def test_key_is_case_insensitive(self):
        a = SymbolEntry(name="Total", kind="variable", module="Module1", procedure="Main")
        b = SymbolEntry(name="TOTAL", kind="variable", module="module1", procedure="MAIN")
        assert a.key == b.key

    def test_to_dict_omits_line_number(self):
        entry = SymbolEntry(
            name="Total", kind="variable", module="Module1",
            conventional_name="gdblTotal", line_number=12,
        )
        entry.references.record("Form1", None, 4, 1, 8)

        data = entry.to_dict()
        assert "line_number" not in data
        assert data["procedure"] == ""
        assert data["is_conventional"] is False
        assert data["references"] == [
            {
                "module": "Form1",
                "procedure": "",
                "line_numbers": [4],
                "occurrence_indexes": [1],
                "start_chars": [8],
            }
        ]


# =============================================================================
# SymbolTable
# =============================================================================


class TestSymbolTable:

    def test_add_returns_existing_entry(self):
        table = SymbolTable()
        first = table.add(SymbolEntry(name="Total", kind="variable", module="Module1"))
        second = table.add(SymbolEntry(name="total", kind="variable", module="MODULE1"))

        assert second is first
        assert len(table) == 1

    def test_same_name_different_scope(self):
        table = SymbolTable()
        table.get_or_create("Module1", "i", "variable", procedure="Main")
        table.get_or_create("Module1", "i", "variable", procedure="Other")
        table.get_or_create("Module1", "i", "parameter", procedure="Main")

        assert len(table) == 3

    def test_get(self):
        table = SymbolTable()
        entry = table.get_or_create("Module1", "Main", "procedure")

        assert table.get("module1", "main", "procedure") is entry
        assert table.get("Module1", "Main", "variable") is None

    def test_get_or_create_keeps_first_entry(self):
        table = SymbolTable()
        first = table.get_or_create("Module1", "Total", "variable", conventional_name="gdblTotal")
        again = table.get_or_create("Module1", "Total", "variable", conventional_name="other")

        assert again is first
        assert again.conventional_name == "gdblTotal"

    def test_renames(self):
        table = SymbolTable()
        table.get_or_create("Module1", "Total", "variable", conventional_name="gdblTotal")
        table.get_or_create("Module1", "Main", "procedure")

        assert [e.name for e in table.renames()] == ["Total"]

    def test_entries_keep_insertion_order(self):
        table = SymbolTable()
        for name in ["Zeta", "Alpha", "Mid"]:
            table.get_or_create("Module1", name, "constant")

        assert [e.name for e in table.entries()] == ["Zeta", "Alpha", "Mid"]

    def test_to_dict(self):
        table = SymbolTable()
        table.get_or_create("Module1", "Total", "variable")

        data = table.to_dict()
        assert data["symbol_count"] == 1
        assert data["symbols"][0]["name"] == "Total"

    def test_concurrent_get_or_create(self):
        table = SymbolTable()
        barrier = threading.Barrier(8)

        def worker(_):
            barrier.wait()
            return table.get_or_create("Module1", "Total", "variable")

        with ThreadPoolExecutor(max_workers=8) as pool:
            entries = list(pool.map(worker, range(8)))

        assert len(table) == 1
        assert all(e is entries[0] for e in entries)
