"""Unit tests for directory and in-memory diff sources."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import OverlaySourceError
from locators.diff_catalog import DiffCatalog
from locators.diff_sources import DirectoryDiffSource, MappingDiffSource
from tests.fixture_paths import BASELINE_VERSION, locator_fixture_dir


def test_directory_source_reads_supported_files_and_skips_baseline() -> None:
    """Only locator files other than the excluded baseline should be listed."""
    source = DirectoryDiffSource(locator_fixture_dir(), exclude=(BASELINE_VERSION,))

    labels = [raw_diff.label for raw_diff in source.iter_raw_diffs()]

    assert labels == ["1.39.0", "1.49.0", "1.85.0", "1.87.2", "1.90.0", "nightly"]


def test_directory_source_reports_parse_failures_as_load_errors() -> None:
    """Broken files should become raw entries carrying a load error."""
    source = DirectoryDiffSource(locator_fixture_dir(), exclude=(BASELINE_VERSION,))

    broken = {raw_diff.label: raw_diff for raw_diff in source.iter_raw_diffs()}["1.90.0"]

    assert broken.payload is None and "JSON" in str(broken.load_error)


def test_directory_catalog_keeps_valid_entries() -> None:
    """Catalog from the fixture directory should skip only the bad files."""
    catalog = DiffCatalog.from_source(
        DirectoryDiffSource(locator_fixture_dir(), exclude=(BASELINE_VERSION,))
    )

    assert [str(version) for version in catalog.list_available()] == [
        "1.39.0",
        "1.49.0",
        "1.85.0",
        "1.87.2",
    ]
    assert sorted(warning.label for warning in catalog.diagnostics) == ["1.90.0", "nightly"]


def test_python_diff_module_exposes_callable_leaf() -> None:
    """Python diff modules should load parameterized builders as leaves."""
    catalog = DiffCatalog.from_source(
        DirectoryDiffSource(locator_fixture_dir(), exclude=(BASELINE_VERSION,))
    )

    diff = catalog.diff_for("1.85.0")

    assert diff is not None
    builder = diff["ViewTitlePart"]["actionConstructor"]
    assert builder("Refresh") == ".//a[@aria-label='Refresh']"


def test_python_module_without_diff_attribute_is_load_error(tmp_path: Path) -> None:
    """Python files missing the diff export should be reported, not raised."""
    (tmp_path / "1.2.0.py").write_text("locators = {}\n", encoding="utf-8")

    raw_diffs = list(DirectoryDiffSource(tmp_path).iter_raw_diffs())

    assert raw_diffs[0].load_error is not None and "diff" in raw_diffs[0].load_error


def test_python_module_raising_on_import_is_load_error(tmp_path: Path) -> None:
    """Errors raised while executing a diff module should be contained."""
    (tmp_path / "1.2.0.py").write_text("raise RuntimeError('boom')\n", encoding="utf-8")

    raw_diffs = list(DirectoryDiffSource(tmp_path).iter_raw_diffs())

    assert "boom" in str(raw_diffs[0].load_error)


def test_yaml_without_locators_key_is_load_error(tmp_path: Path) -> None:
    """YAML documents must hold the tree under the locators key."""
    (tmp_path / "1.2.0.yml").write_text("Workbench:\n  constructor: x\n", encoding="utf-8")

    raw_diffs = list(DirectoryDiffSource(tmp_path).iter_raw_diffs())

    assert "locators" in str(raw_diffs[0].load_error)


def test_missing_directory_raises_source_error(tmp_path: Path) -> None:
    """A missing directory is fatal for the source."""
    source = DirectoryDiffSource(tmp_path / "missing")

    with pytest.raises(OverlaySourceError):
        list(source.iter_raw_diffs())


def test_mapping_source_yields_labels_and_location() -> None:
    """In-memory sources should report their location on every entry."""
    source = MappingDiffSource({"1.1.0": {"A": {"x": 1}}}, location="inline")

    raw_diffs = list(source.iter_raw_diffs())

    assert raw_diffs[0].label == "1.1.0" and raw_diffs[0].location == "inline"


def test_directory_source_excludes_by_version_equality() -> None:
    """Exclusions should match file stems by version, not by exact text."""
    source = DirectoryDiffSource(locator_fixture_dir(), exclude=("1.37-insider", "1.39"))

    labels = [raw_diff.label for raw_diff in source.iter_raw_diffs()]

    assert "1.37.0" not in labels and "1.39.0" not in labels
    assert labels[0] == "1.49.0"
