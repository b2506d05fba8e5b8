"""Directory-backed locator loading for a requested application version.

This module wires a locator directory into a baseline tree and a diff
catalog, then resolves trees for target versions on demand.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.config import OverlayConfig
from core.errors import OverlayConfigError, OverlaySourceError
from core.logging_config import get_logger
from core.types import CatalogLoadWarning
from locators.diff_catalog import DiffCatalog
from locators.diff_sources import DirectoryDiffSource
from locators.locator_files import find_locator_file, read_locator_file
from locators.resolver import ResolutionPlan, plan_resolution, resolve_locators
from locators.tree_merge import copy_tree, tree_shape_problem
from locators.version import Version, VersionLike, parse_version

logger = get_logger(__name__)


class LocatorLoader:
    """Resolve locators from a baseline file and sibling diff files."""

    def __init__(self, locators_dir: Path | str, base_version: str) -> None:
        """Load the baseline and build the diff catalog.

        Args:
            locators_dir: Directory holding baseline and diff files.
            base_version: Baseline version; its file is found by version equality.

        Raises:
            InvalidVersionFormatError: If base_version cannot be parsed.
            OverlaySourceError: If the directory or baseline file is unusable.
        """
        self._base_version = parse_version(base_version)
        self._source = DirectoryDiffSource(locators_dir, exclude=(self._base_version,))
        self._baseline = load_baseline(self._source.directory, self._base_version)
        self._catalog = DiffCatalog.from_source(self._source)

    @classmethod
    def from_config(cls, config: OverlayConfig) -> "LocatorLoader":
        """Build a loader from runtime configuration.

        Raises:
            OverlayConfigError: If no baseline version is configured.
        """
        if config.base_version is None:
            raise OverlayConfigError(
                "No baseline version configured. "
                "Set OVERLAY_BASE_VERSION or pass --base-version."
            )
        return cls(config.locators_dir, config.base_version)

    @property
    def base_version(self) -> Version:
        return self._base_version

    @property
    def catalog(self) -> DiffCatalog:
        return self._catalog

    @property
    def diagnostics(self) -> tuple[CatalogLoadWarning, ...]:
        return self._catalog.diagnostics

    def baseline(self) -> dict[str, Any]:
        """Return a copy of the baseline tree."""
        return copy_tree(self._baseline)

    def plan(self, target_version: VersionLike) -> ResolutionPlan:
        """Return the ordered diffs that resolving a target would apply."""
        return plan_resolution(self._base_version, target_version, self._catalog)

    def load_locators(self, target_version: VersionLike) -> dict[str, Any]:
        """Resolve the locator tree for a target version.

        Args:
            target_version: Requested version, channel suffix allowed.

        Returns:
            Fresh resolved tree.

        Raises:
            InvalidVersionFormatError: If target_version cannot be parsed.
        """
        return resolve_locators(self._baseline, self._base_version, target_version, self._catalog)


def load_baseline(locators_dir: Path, base_version: VersionLike) -> dict[str, Any]:
    """Read and validate the baseline tree named after a version.

    Args:
        locators_dir: Directory holding the baseline file.
        base_version: Baseline version, matched against parsed file stems.

    Returns:
        Baseline locator tree.

    Raises:
        InvalidVersionFormatError: If base_version cannot be parsed.
        OverlaySourceError: If the file is missing, unreadable, or malformed.
    """
    baseline_path = find_locator_file(locators_dir, base_version)
    if baseline_path is None:
        raise OverlaySourceError(
            f"Baseline locator file for version {base_version} not found in {locators_dir}. "
            "Add a .yaml, .json, or .py file named after the baseline version."
        )
    payload = read_locator_file(baseline_path, "baseline")
    shape_problem = tree_shape_problem(payload)
    if shape_problem is not None:
        raise OverlaySourceError(
            f"Invalid baseline locator file at {baseline_path}: {shape_problem}."
        )
    baseline = copy_tree(payload)  # type: ignore[arg-type]
    logger.info(
        "locator_baseline_loaded",
        base_version=str(base_version),
        location=str(baseline_path),
        component_count=len(baseline),
    )
    return baseline
