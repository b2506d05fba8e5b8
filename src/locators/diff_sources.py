"""Backing stores that supply raw per-version locator diffs.

A diff source only reports what it finds. Version parsing, shape checks,
and skip decisions belong to the diff catalog.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Mapping, Protocol

from core.errors import OverlaySourceError
from core.types import RawDiff
from locators.locator_files import is_locator_file, locator_file_version, read_locator_file
from locators.version import VersionLike, parse_version


class DiffSource(Protocol):
    """Capability that enumerates raw diff entries."""

    def iter_raw_diffs(self) -> Iterable[RawDiff]:
        """Yield every diff entry known to the backing store."""


class MappingDiffSource:
    """In-memory diff source keyed by version text."""

    def __init__(self, diffs: Mapping[str, object], location: str = "memory") -> None:
        self._diffs = dict(diffs)
        self._location = location

    def iter_raw_diffs(self) -> Iterator[RawDiff]:
        for label, payload in self._diffs.items():
            yield RawDiff(label=str(label), location=self._location, payload=payload)


class DirectoryDiffSource:
    """Diff source reading one locator file per version from a directory.

    File name stems are version labels, e.g. ``1.49.0.yaml``. Files with
    unsupported extensions are ignored.
    """

    def __init__(self, directory: Path | str, exclude: Iterable[VersionLike] = ()) -> None:
        """Create a directory-backed source.

        Args:
            directory: Directory holding diff files.
            exclude: Versions whose files are skipped, typically the baseline.
                Matching uses version equality, so ``1.37`` excludes ``1.37.0.yaml``.
        """
        self._directory = Path(directory).expanduser().resolve()
        self._exclude = frozenset(parse_version(version) for version in exclude)

    @property
    def directory(self) -> Path:
        return self._directory

    def iter_raw_diffs(self) -> Iterator[RawDiff]:
        """Yield raw diffs in file name order.

        Raises:
            OverlaySourceError: If the directory does not exist.
        """
        if not self._directory.is_dir():
            raise OverlaySourceError(
                f"Locator directory not found at {self._directory}. "
                "Set OVERLAY_LOCATORS_DIR or pass --locators-dir."
            )
        for path in sorted(self._directory.iterdir()):
            if not is_locator_file(path) or locator_file_version(path) in self._exclude:
                continue
            yield _read_raw_diff(path)


def _read_raw_diff(path: Path) -> RawDiff:
    try:
        payload = read_locator_file(path, "diff")
    except OverlaySourceError as error:
        return RawDiff(label=path.stem, location=str(path), load_error=str(error))
    return RawDiff(label=path.stem, location=str(path), payload=payload)
