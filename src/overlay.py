"""Public SDK surface for the locator overlay.

This module provides a stable import path for automation code.
It re-exports version ordering, the diff catalog, and the resolver.
"""

from __future__ import annotations

from core.config import OverlayConfig
from core.errors import (
    InvalidVersionFormatError,
    OverlayConfigError,
    OverlayDependencyError,
    OverlayError,
    OverlaySourceError,
)
from core.types import CatalogLoadWarning, LocatorDiff, LocatorTree, RawDiff
from locators.diff_catalog import DiffCatalog, DiffEntry, list_available
from locators.diff_sources import DiffSource, DirectoryDiffSource, MappingDiffSource
from locators.loader import LocatorLoader, load_baseline
from locators.resolver import ResolutionPlan, plan_resolution, resolve, resolve_locators
from locators.tree_merge import copy_tree, merge_locator_trees, node_kind
from locators.version import Version, compare_versions, parse_version, version_ordering

__all__ = [
    "CatalogLoadWarning",
    "DiffCatalog",
    "DiffEntry",
    "DiffSource",
    "DirectoryDiffSource",
    "InvalidVersionFormatError",
    "LocatorDiff",
    "LocatorLoader",
    "LocatorTree",
    "MappingDiffSource",
    "OverlayConfig",
    "OverlayConfigError",
    "OverlayDependencyError",
    "OverlayError",
    "OverlaySourceError",
    "RawDiff",
    "ResolutionPlan",
    "Version",
    "compare_versions",
    "copy_tree",
    "list_available",
    "load_baseline",
    "merge_locator_trees",
    "node_kind",
    "parse_version",
    "plan_resolution",
    "resolve",
    "resolve_locators",
    "version_ordering",
]
