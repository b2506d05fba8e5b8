"""Catalog of per-version locator diffs.

The catalog is built once from a diff source and is read-only afterwards.
Malformed entries are skipped and reported as CatalogLoadWarning diagnostics
so one bad file never blocks resolution with the remaining entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from core.errors import InvalidVersionFormatError
from core.logging_config import get_logger
from core.types import CatalogLoadWarning, LocatorDiff, RawDiff
from locators.diff_sources import DiffSource, MappingDiffSource
from locators.tree_merge import copy_tree, tree_shape_problem
from locators.version import Version, VersionLike, parse_version

logger = get_logger(__name__)


@dataclass(frozen=True)
class DiffEntry:
    """One validated catalog entry.

    Attributes:
        version: Version the diff transitions into.
        diff: Partial locator tree introduced at that version.
        location: Origin of the entry.
    """

    version: Version
    diff: LocatorDiff
    location: str


class DiffCatalog:
    """Immutable set of version-tagged locator diffs."""

    def __init__(
        self,
        entries: Iterable[DiffEntry] = (),
        diagnostics: Iterable[CatalogLoadWarning] = (),
    ) -> None:
        """Create a catalog from validated entries.

        Entries whose version equals an earlier entry are dropped and
        reported in ``diagnostics``; the first entry for a version wins.

        Args:
            entries: Validated entries.
            diagnostics: Warnings collected while loading entries.
        """
        by_version: dict[Version, DiffEntry] = {}
        collected = list(diagnostics)
        for entry in entries:
            kept = by_version.get(entry.version)
            if kept is not None:
                collected.append(_duplicate_warning(str(entry.version), entry.location, kept))
                continue
            by_version[entry.version] = entry
        self._entries = tuple(sorted(by_version.values(), key=lambda entry: entry.version))
        self._by_version = MappingProxyType(by_version)
        self._diagnostics = tuple(collected)

    @classmethod
    def from_source(cls, source: DiffSource) -> "DiffCatalog":
        """Build a catalog from a diff source.

        Args:
            source: Backing store of raw diffs.

        Returns:
            Catalog holding every valid entry, plus diagnostics for skipped ones.

        Raises:
            OverlaySourceError: If the source itself cannot be opened.
        """
        entries: dict[Version, DiffEntry] = {}
        diagnostics: list[CatalogLoadWarning] = []
        for raw_diff in source.iter_raw_diffs():
            entry_or_warning = _validate_raw_diff(raw_diff, entries)
            if isinstance(entry_or_warning, CatalogLoadWarning):
                diagnostics.append(entry_or_warning)
                logger.warning(
                    "diff_catalog_entry_skipped",
                    label=entry_or_warning.label,
                    location=entry_or_warning.location,
                    reason=entry_or_warning.reason,
                )
                continue
            entries[entry_or_warning.version] = entry_or_warning
        catalog = cls(entries.values(), diagnostics)
        logger.info(
            "diff_catalog_loaded",
            entry_count=len(catalog),
            skipped_count=len(diagnostics),
        )
        return catalog

    @classmethod
    def from_mapping(cls, diffs: Mapping[str, object]) -> "DiffCatalog":
        """Build a catalog from an in-memory ``{version: diff}`` mapping."""
        return cls.from_source(MappingDiffSource(diffs))

    @property
    def diagnostics(self) -> tuple[CatalogLoadWarning, ...]:
        """Warnings for entries skipped during load."""
        return self._diagnostics

    def entries(self) -> tuple[DiffEntry, ...]:
        """Return all entries in ascending version order."""
        return self._entries

    def list_available(self) -> tuple[Version, ...]:
        """Return every version with an explicit diff, ascending."""
        return tuple(entry.version for entry in self._entries)

    def diff_for(self, version: VersionLike) -> LocatorDiff | None:
        """Return the diff introduced at a version, if any."""
        entry = self._by_version.get(parse_version(version))
        return copy_tree(entry.diff) if entry is not None else None

    def __contains__(self, version: object) -> bool:
        if not isinstance(version, (str, Version)):
            return False
        try:
            return parse_version(version) in self._by_version
        except InvalidVersionFormatError:
            return False

    def __iter__(self) -> Iterator[DiffEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def list_available(catalog: DiffCatalog) -> tuple[Version, ...]:
    """Return the versions that carry explicit overrides in a catalog."""
    return catalog.list_available()


def _validate_raw_diff(
    raw_diff: RawDiff,
    accepted: Mapping[Version, DiffEntry],
) -> DiffEntry | CatalogLoadWarning:
    if raw_diff.load_error is not None:
        return _warning(raw_diff, raw_diff.load_error)
    try:
        version = parse_version(raw_diff.label)
    except InvalidVersionFormatError as error:
        return _warning(raw_diff, str(error))
    shape_problem = tree_shape_problem(raw_diff.payload)
    if shape_problem is not None:
        return _warning(raw_diff, f"Invalid diff payload: {shape_problem}.")
    duplicate = accepted.get(version)
    if duplicate is not None:
        return _duplicate_warning(raw_diff.label, raw_diff.location, duplicate)
    return DiffEntry(
        version=version,
        diff=copy_tree(raw_diff.payload),  # type: ignore[arg-type]
        location=raw_diff.location,
    )


def _warning(raw_diff: RawDiff, reason: str) -> CatalogLoadWarning:
    return CatalogLoadWarning(label=raw_diff.label, location=raw_diff.location, reason=reason)


def _duplicate_warning(label: str, location: str, kept: DiffEntry) -> CatalogLoadWarning:
    return CatalogLoadWarning(
        label=label,
        location=location,
        reason=f"Duplicate diff for version {kept.version}; keeping entry from {kept.location}.",
    )
