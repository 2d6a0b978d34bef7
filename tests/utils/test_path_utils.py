"""Tests for path utilities used by the logging and export layers."""

from pathlib import Path

import pytest

from vbrename.utils.path_utils import ensure_directory, ensure_extension, normalize_path


class TestNormalizePath:

    def test_relative_path_becomes_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = normalize_path("reports/project.references.json")
        assert result.is_absolute()
        assert result == (tmp_path / "reports" / "project.references.json").resolve()

    def test_home_is_expanded(self):
        assert "~" not in str(normalize_path("~/reports"))

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_path_rejected(self, value):
        with pytest.raises(ValueError, match="cannot be None or empty"):
            normalize_path(value)


class TestEnsureDirectory:

    def test_creates_nested_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "c"
        assert ensure_directory(target) == target
        assert target.is_dir()

    def test_existing_directory_is_kept(self, tmp_path):
        ensure_directory(tmp_path)
        assert tmp_path.is_dir()


class TestEnsureExtension:

    def test_appends_to_multi_part_names(self):
        assert ensure_extension(Path("Module1.linereplace"), ".json") == Path("Module1.linereplace.json")

    def test_keeps_matching_extension_case_insensitively(self):
        assert ensure_extension(Path("checks.CSV"), "csv") == Path("checks.CSV")

    def test_adds_missing_dot(self):
        assert ensure_extension(Path("project"), "json") == Path("project.json")
