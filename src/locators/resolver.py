"""Resolve the effective locator tree for a target version.

Diffs form a replayable changelog: each one records what changed going into
its version. Resolution selects the diffs between the baseline and the
target, orders them in the direction of travel, and folds them onto the
baseline with the tree merge.

Downgrades replay the selected diffs newest first without inverting them.
That only reconstructs the historical tree when each override is also valid
for the older version, so downgrade results are best effort.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.logging_config import get_logger
from core.types import LocatorTree, ResolutionDirection
from locators.diff_catalog import DiffCatalog, DiffEntry
from locators.tree_merge import copy_tree, merge_locator_trees
from locators.version import Version, VersionLike, parse_version

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolutionPlan:
    """Ordered diffs to apply for one resolution.

    Attributes:
        base_version: Version the baseline tree reflects.
        target_version: Requested version.
        direction: Direction of travel from baseline to target.
        entries: Catalog entries in application order.
    """

    base_version: Version
    target_version: Version
    direction: ResolutionDirection
    entries: tuple[DiffEntry, ...]

    @property
    def versions(self) -> tuple[Version, ...]:
        return tuple(entry.version for entry in self.entries)


def plan_resolution(
    base_version: VersionLike,
    target_version: VersionLike,
    catalog: DiffCatalog,
) -> ResolutionPlan:
    """Select and order the diffs between a baseline and a target version.

    The baseline boundary is exclusive and the target boundary is inclusive.

    Args:
        base_version: Version the baseline tree reflects.
        target_version: Requested version.
        catalog: Available diffs.

    Returns:
        Plan with the direction and the diffs in application order.

    Raises:
        InvalidVersionFormatError: If either version cannot be parsed.
    """
    base = parse_version(base_version)
    target = parse_version(target_version)
    if base == target:
        return ResolutionPlan(base, target, "none", ())
    if base < target:
        selected = tuple(entry for entry in catalog if base < entry.version <= target)
        return ResolutionPlan(base, target, "upgrade", selected)
    selected = tuple(
        entry for entry in reversed(catalog.entries()) if target <= entry.version < base
    )
    return ResolutionPlan(base, target, "downgrade", selected)


def resolve_locators(
    base: LocatorTree,
    base_version: VersionLike,
    target_version: VersionLike,
    catalog: DiffCatalog,
) -> dict[str, Any]:
    """Build the locator tree for a target version.

    Args:
        base: Baseline locator tree.
        base_version: Version the baseline tree reflects.
        target_version: Requested version.
        catalog: Available diffs.

    Returns:
        Fresh resolved tree. The baseline and catalog are left untouched.

    Raises:
        InvalidVersionFormatError: If either version cannot be parsed.
    """
    plan = plan_resolution(base_version, target_version, catalog)
    logger.debug(
        "locator_resolution_planned",
        base_version=str(plan.base_version),
        target_version=str(plan.target_version),
        direction=plan.direction,
        diff_versions=[str(version) for version in plan.versions],
    )
    resolved = copy_tree(base)
    for entry in plan.entries:
        resolved = merge_locator_trees(resolved, entry.diff)
        logger.debug(
            "locator_diff_applied",
            version=str(entry.version),
            location=entry.location,
        )
    return resolved


resolve = resolve_locators
