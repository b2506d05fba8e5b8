"""Shared typed models.

This module defines the locator tree aliases and immutable data models
used by diff sources, the catalog, the resolver, and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

LocatorTree = Mapping[str, Any]
"""Component name to nested selector mapping. Non-mapping values are opaque leaves."""

LocatorDiff = Mapping[str, Any]
"""Deep-partial locator tree introduced at one version."""

NodeKind = Literal["composite", "leaf"]
ResolutionDirection = Literal["none", "upgrade", "downgrade"]
VersionOrdering = Literal["less", "equal", "greater"]


@dataclass(frozen=True)
class RawDiff:
    """Unvalidated diff entry produced by a diff source.

    Attributes:
        label: Unparsed version text, usually a file name stem.
        location: Human-readable origin of the entry.
        payload: Diff tree when the source could read it.
        load_error: Reason the source could not read the entry.
    """

    label: str
    location: str
    payload: object = None
    load_error: str | None = None


@dataclass(frozen=True)
class CatalogLoadWarning:
    """Non-fatal diagnostic for a diff entry skipped during catalog load.

    Attributes:
        label: Unparsed version text of the skipped entry.
        location: Origin of the skipped entry.
        reason: Why the entry was skipped.
    """

    label: str
    location: str
    reason: str

    def describe(self) -> str:
        """Render a single-line diagnostic message."""
        return f"{self.label}: {self.reason}"
