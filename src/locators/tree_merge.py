"""Deep override merge for locator trees.

A node is composite when it is a ``Mapping``; every other value is an opaque
leaf that is never inspected or copied. Merging only adds or replaces keys,
it never deletes them, and it never mutates either input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from core.types import LocatorDiff, LocatorTree, NodeKind


def node_kind(value: object) -> NodeKind:
    """Classify a tree node as composite or leaf."""
    if isinstance(value, Mapping):
        return "composite"
    return "leaf"


def copy_tree(tree: LocatorTree) -> dict[str, Any]:
    """Return a structurally independent copy of a locator tree.

    Args:
        tree: Tree to copy.

    Returns:
        Fresh dictionary tree. Composites are rebuilt, leaves are carried by reference.
    """
    return {key: _copy_node(value) for key, value in tree.items()}


def merge_locator_trees(base: LocatorTree, diff: LocatorDiff) -> dict[str, Any]:
    """Overlay a diff tree onto a base tree.

    For each key in ``diff``: when both sides hold composite nodes the
    subtrees are merged recursively, otherwise the diff value replaces the
    base value. Keys missing from ``diff`` are carried through unchanged and
    keys missing from ``base`` are added.

    Args:
        base: Tree being overridden.
        diff: Partial tree of overrides.

    Returns:
        New merged tree. Neither input is modified.
    """
    merged = copy_tree(base)
    for key, diff_value in diff.items():
        base_value = base.get(key)
        if node_kind(base_value) == "composite" and node_kind(diff_value) == "composite":
            merged[key] = merge_locator_trees(base_value, diff_value)
        else:
            merged[key] = _copy_node(diff_value)
    return merged


def _copy_node(value: object) -> Any:
    if node_kind(value) == "composite":
        return copy_tree(value)  # type: ignore[arg-type]
    return value


def tree_shape_problem(payload: object) -> str | None:
    """Describe why a payload is not a component-to-selectors tree.

    Args:
        payload: Candidate locator tree or diff.

    Returns:
        Problem description, or None when the payload is well formed.
    """
    if node_kind(payload) != "composite":
        return f"expected a mapping of components, got {type(payload).__name__}"
    for component_name, selectors in payload.items():  # type: ignore[attr-defined]
        if not isinstance(component_name, str):
            return f"component names must be strings, got {type(component_name).__name__}"
        if node_kind(selectors) != "composite":
            return (
                f"component '{component_name}' must map selector names to values, "
                f"got {type(selectors).__name__}"
            )
    return None
