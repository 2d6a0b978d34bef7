"""Shared fixtures for rename engine and report tests."""

from __future__ import annotations

import pytest

from vbrename.core.engine import RenameEngine


MODULE1_SOURCE = [
    "Option Explicit",
    "Public Total As Double",
    "Public Sub Main()",
    "    Total = Total + 1",
    '    Debug.Print "Total" & Total  \' show Total',
    "End Sub",
]


@pytest.fixture
def populated_engine() -> RenameEngine:
    """Engine holding usages and planned edits for two modules."""
    engine = RenameEngine()
    total = engine.symbols.get_or_create(
        "Module1", "Total", "variable", conventional_name="gdblTotal", line_number=2
    )
    engine.symbols.get_or_create("Module1", "Main", "procedure")

    engine.record_usage(total, "Module1", None, 2, 1, 7)
    engine.record_usage(total, "Module1", "Main", 4, 1, 4)
    engine.record_usage(total, "Module1", "Main", 4, 2, 12)
    engine.record_usage(total, "Form1", "cmdOk_Click", 9, 1, 4)
    engine.record_usage(total, "basUtil", "Reset", 3, 1, 4)

    engine.plan_rename(
        total, "Module1", MODULE1_SOURCE[1], 2, "Total", "gdblTotal",
        "GlobalVariable_Declaration",
    )
    for line_number in (4, 5):
        engine.plan_rename(
            total, "Module1", MODULE1_SOURCE[line_number - 1], line_number,
            "Total", "gdblTotal", "GlobalVariable_Reference",
            skip_string_literals=True, procedure="Main",
        )
    engine.plan_rename(
        total, "Form1", "    lblTotal = Total", 9, "Total", "gdblTotal",
        "GlobalVariable_Reference", procedure="cmdOk_Click",
    )
    return engine
