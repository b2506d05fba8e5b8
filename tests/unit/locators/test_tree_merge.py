"""Unit tests for locator tree merging."""

from __future__ import annotations

import copy
import threading

from locators.diff_catalog import DiffCatalog
from locators.resolver import resolve_locators
from locators.tree_merge import copy_tree, merge_locator_trees, node_kind, tree_shape_problem


def test_merge_overrides_leaf_and_keeps_siblings() -> None:
    """Diff leaves should replace base leaves while siblings survive."""
    merged = merge_locator_trees({"A": {"x": 1, "y": 2}}, {"A": {"x": 9}})

    assert merged == {"A": {"x": 9, "y": 2}}


def test_merge_adds_new_component() -> None:
    """Keys missing from base should be introduced as new structure."""
    merged = merge_locator_trees({"A": {"x": 1}}, {"B": {"z": 5}})

    assert merged == {"A": {"x": 1}, "B": {"z": 5}}


def test_merge_does_not_mutate_inputs() -> None:
    """Base and diff trees should equal their pre-merge snapshots."""
    base = {"A": {"x": 1, "nested": {"deep": "a"}}, "B": {"y": [1, 2]}}
    diff = {"A": {"nested": {"deep": "b"}}, "C": {"z": {"k": "v"}}}
    base_snapshot = copy.deepcopy(base)
    diff_snapshot = copy.deepcopy(diff)

    merged = merge_locator_trees(base, diff)
    merged["A"]["nested"]["deep"] = "changed"
    merged["C"]["z"]["k"] = "changed"

    assert base == base_snapshot and diff == diff_snapshot


def test_merge_leaf_replaces_composite_and_composite_replaces_leaf() -> None:
    """When node kinds differ the diff value should win outright."""
    base = {"A": {"x": {"old": 1}, "y": "leaf"}}
    diff = {"A": {"x": "new-leaf", "y": {"now": "composite"}}}

    merged = merge_locator_trees(base, diff)

    assert merged == {"A": {"x": "new-leaf", "y": {"now": "composite"}}}


def test_merge_keeps_callable_leaves_opaque() -> None:
    """Callable builders should be carried as leaves without being invoked."""

    def builder(title: str) -> str:
        return f".//a[@aria-label='{title}']"

    merged = merge_locator_trees({"A": {"x": "old"}}, {"A": {"x": builder}})

    assert merged["A"]["x"] is builder


def test_copy_tree_is_independent() -> None:
    """Copied trees should share no mutable composites with the source."""
    source = {"A": {"x": 1}}

    copied = copy_tree(source)
    copied["A"]["x"] = 2

    assert source == {"A": {"x": 1}} and copied is not source


def test_node_kind_treats_only_mappings_as_composite() -> None:
    """Lists, strings, and callables should all be leaves."""
    assert node_kind({"a": 1}) == "composite"
    assert node_kind(["a"]) == "leaf"
    assert node_kind("a") == "leaf"
    assert node_kind(len) == "leaf"
    assert node_kind(None) == "leaf"


def test_tree_shape_problem_flags_non_mapping_components() -> None:
    """Components must map selector names to values."""
    assert tree_shape_problem({"A": {"x": 1}}) is None
    assert tree_shape_problem(["A"]) is not None
    assert tree_shape_problem({"A": "not-a-mapping"}) is not None
    assert tree_shape_problem({1: {"x": 1}}) is not None


class _LockedDriver:
    """Selector builder owner holding state that cannot be copied."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def by_title(self, title: str) -> str:
        return f".//a[@aria-label='{title}']"


def test_bound_method_leaf_is_carried_by_reference() -> None:
    """Builders bound to uncopyable owners should pass through merge untouched."""
    driver = _LockedDriver()

    merged = merge_locator_trees({"A": {"x": "old"}}, {"A": {"x": driver.by_title}})

    assert merged["A"]["x"].__self__ is driver


def test_bound_method_leaf_survives_catalog_and_resolution() -> None:
    """Catalog load and resolution should keep the builder's owner."""
    driver = _LockedDriver()
    catalog = DiffCatalog.from_mapping({"1.1.0": {"A": {"x": driver.by_title}}})

    resolved = resolve_locators({"A": {"x": "old"}}, "1.0.0", "1.1.0", catalog)

    assert resolved["A"]["x"].__self__ is driver
    assert resolved["A"]["x"]("Save") == ".//a[@aria-label='Save']"


def test_leaf_objects_are_shared_while_composites_are_rebuilt() -> None:
    """Copies should rebuild mappings but keep leaf identity."""
    selector = ["css", ".tab"]
    source = {"A": {"x": selector}}

    copied = copy_tree(source)

    assert copied["A"] is not source["A"] and copied["A"]["x"] is selector
