"""Tests for selecting the matches a rename rewrites on one line."""

import pytest

from vbrename.processors.replace_planner import ALL_OCCURRENCES, select_matches
from vbrename.processors.token_locator import TokenMatch

SIGNATURE = "Sub Foo(a As Total, b As Total)"


class TestIdentityRename:

    def test_identical_names_select_nothing(self):
        assert select_matches("Dim Foo As Long", "Foo", "Foo") == []

    def test_case_only_rename_is_planned(self):
        assert select_matches("Dim foo As Long", "foo", "Foo") == [TokenMatch(4, 7, "foo")]


class TestOccurrenceSelection:

    def test_all_occurrences_by_default(self):
        matches = select_matches(SIGNATURE, "Total", "Total_T")
        assert [(m.start, m.end) for m in matches] == [(13, 18), (25, 30)]

    def test_explicit_all_sentinel(self):
        assert len(select_matches(SIGNATURE, "Total", "Total_T", ALL_OCCURRENCES)) == 2

    @pytest.mark.parametrize("index, start", [(1, 13), (2, 25)])
    def test_specific_occurrence(self, index, start):
        matches = select_matches(SIGNATURE, "Total", "Total_T", occurrence_index=index)
        assert matches == [TokenMatch(start, start + 5, "Total")]

    def test_out_of_range_occurrence_selects_nothing(self):
        assert select_matches(SIGNATURE, "Total", "Total_T", occurrence_index=3) == []

    def test_zero_is_treated_as_all(self):
        assert len(select_matches(SIGNATURE, "Total", "Total_T", occurrence_index=0)) == 2

    def test_no_match_selects_nothing(self):
        assert select_matches(SIGNATURE, "Amount", "dblAmount") == []


class TestStringLiteralExclusion:

    def test_match_inside_literal_is_skipped(self):
        line = 'Debug.Print "Total" & Total'
        matches = select_matches(line, "Total", "dblTotal", skip_string_literals=True)
        assert matches == [TokenMatch(22, 27, "Total")]

    def test_literals_are_eligible_when_not_skipping(self):
        line = 'Debug.Print "Total" & Total'
        assert len(select_matches(line, "Total", "dblTotal")) == 2

    def test_escaped_quotes_keep_literal_open(self):
        line = 'x = "He said ""Total"" now" & Total'
        matches = select_matches(line, "Total", "dblTotal", skip_string_literals=True)
        assert [m.start for m in matches] == [line.rindex("Total")]

    def test_occurrence_index_counts_eligible_matches_only(self):
        line = 'Log "Total", Total, Total'
        matches = select_matches(
            line, "Total", "dblTotal", occurrence_index=2, skip_string_literals=True
        )
        assert [m.start for m in matches] == [line.rindex("Total")]

    def test_every_match_in_literals_selects_nothing(self):
        line = 'MsgBox "Total: " & "Total"'
        assert select_matches(line, "Total", "dblTotal", skip_string_literals=True) == []

    def test_unterminated_literal_does_not_exclude(self):
        # Known boundary case: the open tail is treated as code
        line = 'x = "Total'
        matches = select_matches(line, "Total", "dblTotal", skip_string_literals=True)
        assert [m.start for m in matches] == [5]
