"""Version identifiers and their total ordering.

Versions are dotted numeric identifiers such as ``1.87.2`` with an optional
channel marker (``1.88.0-insider``). The channel is kept as an explicit field
and carries no ordering weight: ``1.88.0-insider`` orders and compares equal
to ``1.88.0``. Missing trailing segments count as zero, so ``1.70`` equals
``1.70.0``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
from typing import Union

from core.constants import VERSION_CHANNEL_SEPARATOR, VERSION_SEGMENT_SEPARATOR
from core.errors import InvalidVersionFormatError
from core.types import VersionOrdering


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """Immutable parsed version value.

    Attributes:
        segments: Numeric segments, left to right.
        channel: Optional release channel marker, e.g. ``insider``.
        raw: Original text the version was parsed from.
    """

    segments: tuple[int, ...]
    channel: str | None = None
    raw: str = field(default="", compare=False)

    @property
    def ordering_key(self) -> tuple[int, ...]:
        """Segments with trailing zeros removed, used for equality and ordering."""
        segments = list(self.segments)
        while segments and segments[-1] == 0:
            segments.pop()
        return tuple(segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.ordering_key == other.ordering_key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return _compare_segments(self.segments, other.segments) < 0

    def __hash__(self) -> int:
        return hash(self.ordering_key)

    def __str__(self) -> str:
        if self.raw:
            return self.raw
        text = VERSION_SEGMENT_SEPARATOR.join(str(segment) for segment in self.segments)
        if self.channel:
            return f"{text}{VERSION_CHANNEL_SEPARATOR}{self.channel}"
        return text


VersionLike = Union[str, Version]


def parse_version(value: VersionLike) -> Version:
    """Parse a version identifier.

    Args:
        value: Version text or an already parsed version.

    Returns:
        Parsed version value.

    Raises:
        InvalidVersionFormatError: If any segment is not numeric.
    """
    if isinstance(value, Version):
        return value
    if not isinstance(value, str):
        raise InvalidVersionFormatError(
            f"Invalid version {value!r}: expected text, got {type(value).__name__}."
        )
    text = value.strip()
    if not text:
        raise InvalidVersionFormatError("Invalid version '': version text is empty.")
    numeric_part, separator, channel = text.partition(VERSION_CHANNEL_SEPARATOR)
    if separator and not channel:
        raise InvalidVersionFormatError(
            f"Invalid version '{text}': channel marker after '-' is empty."
        )
    segments = tuple(
        _parse_segment(segment, text)
        for segment in numeric_part.split(VERSION_SEGMENT_SEPARATOR)
    )
    return Version(segments=segments, channel=channel or None, raw=text)


def compare_versions(left: VersionLike, right: VersionLike) -> int:
    """Compare two versions.

    Returns:
        -1 when left is older, 0 when equal, 1 when left is newer.

    Raises:
        InvalidVersionFormatError: If either version cannot be parsed.
    """
    left_version = parse_version(left)
    right_version = parse_version(right)
    return _compare_segments(left_version.segments, right_version.segments)


def version_ordering(left: VersionLike, right: VersionLike) -> VersionOrdering:
    """Compare two versions and name the outcome."""
    result = compare_versions(left, right)
    if result < 0:
        return "less"
    if result > 0:
        return "greater"
    return "equal"


def _parse_segment(segment: str, text: str) -> int:
    if not segment.isdigit() or not segment.isascii():
        raise InvalidVersionFormatError(
            f"Invalid version '{text}': segment '{segment}' is not numeric. "
            "Use dotted numeric versions such as 1.87.2."
        )
    return int(segment)


def _compare_segments(left: tuple[int, ...], right: tuple[int, ...]) -> int:
    width = max(len(left), len(right))
    padded_left = left + (0,) * (width - len(left))
    padded_right = right + (0,) * (width - len(right))
    if padded_left < padded_right:
        return -1
    if padded_left > padded_right:
        return 1
    return 0
