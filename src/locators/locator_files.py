"""Locator file readers.

This module isolates YAML, JSON, and Python locator file IO.
YAML and JSON documents hold their tree under a top-level ``locators`` key.
Python diff modules export ``diff = {"locators": {...}}`` and Python baseline
modules export ``locators = {...}``, which lets leaves be callable builders.
"""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path
from typing import Any, Literal, Mapping, cast

from core.constants import (
    JSON_FILE_EXTENSIONS,
    LOCATORS_PAYLOAD_KEY,
    PYTHON_BASELINE_ATTRIBUTE,
    PYTHON_DIFF_ATTRIBUTE,
    PYTHON_FILE_EXTENSIONS,
    SUPPORTED_LOCATOR_FILE_EXTENSIONS,
    YAML_FILE_EXTENSIONS,
)
from core.errors import InvalidVersionFormatError, OverlayDependencyError, OverlaySourceError
from locators.version import Version, VersionLike, parse_version

LocatorFileKind = Literal["baseline", "diff"]


def is_locator_file(path: Path) -> bool:
    """Return whether a path has a supported locator file extension."""
    return path.is_file() and path.suffix.lower() in SUPPORTED_LOCATOR_FILE_EXTENSIONS


def read_locator_file(path: Path, kind: LocatorFileKind) -> object:
    """Read the locator tree stored in one file.

    Args:
        path: YAML, JSON, or Python locator file.
        kind: Whether the file holds a baseline or a diff.

    Returns:
        Raw tree payload found in the file.

    Raises:
        OverlayDependencyError: If PyYAML is unavailable for a YAML file.
        OverlaySourceError: If the file cannot be read or lacks a locator tree.
    """
    suffix = path.suffix.lower()
    if suffix in YAML_FILE_EXTENSIONS:
        return _extract_locators(_read_yaml_document(path), path)
    if suffix in JSON_FILE_EXTENSIONS:
        return _extract_locators(_read_json_document(path), path)
    if suffix in PYTHON_FILE_EXTENSIONS:
        return _read_python_locators(path, kind)
    raise OverlaySourceError(
        f"Unsupported locator file format '{suffix}' at {path}. "
        f"Use one of: {', '.join(SUPPORTED_LOCATOR_FILE_EXTENSIONS)}."
    )


def locator_file_version(path: Path) -> Version | None:
    """Return the version named by a locator file stem, or None when unparseable."""
    try:
        return parse_version(path.stem)
    except InvalidVersionFormatError:
        return None


def find_locator_file(directory: Path, version: VersionLike) -> Path | None:
    """Find the locator file whose stem parses to a version equal to ``version``.

    Args:
        directory: Directory holding locator files.
        version: Requested version; ``1.37``, ``1.37.0``, and ``1.37.0-insider``
            all match ``1.37.0.yaml``.

    Returns:
        First matching file in name order, or None.
    """
    target = parse_version(version)
    if not directory.is_dir():
        return None
    for path in sorted(directory.iterdir()):
        if is_locator_file(path) and locator_file_version(path) == target:
            return path
    return None


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as error:
        raise OverlaySourceError(
            f"Failed to read locator file at {path}: {error}. Check file permissions and retry."
        ) from error


def _read_yaml_document(path: Path) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise OverlayDependencyError(
            "YAML locator files require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    text = _read_text(path)
    try:
        return cast(object, yaml.safe_load(text))
    except yaml.YAMLError as error:
        raise OverlaySourceError(
            f"Failed to parse YAML locator file at {path}: {error}. Fix YAML syntax and retry."
        ) from error


def _read_json_document(path: Path) -> object:
    text = _read_text(path)
    try:
        return cast(object, json.loads(text))
    except json.JSONDecodeError as error:
        raise OverlaySourceError(
            f"Failed to parse JSON locator file at {path}: {error.msg}. Fix JSON syntax and retry."
        ) from error


def _read_python_locators(path: Path, kind: LocatorFileKind) -> object:
    module = _load_python_module(path)
    if kind == "baseline":
        if not hasattr(module, PYTHON_BASELINE_ATTRIBUTE):
            raise OverlaySourceError(
                f"Invalid baseline module at {path}: missing module-level "
                f"'{PYTHON_BASELINE_ATTRIBUTE}' mapping."
            )
        return cast(object, getattr(module, PYTHON_BASELINE_ATTRIBUTE))
    if not hasattr(module, PYTHON_DIFF_ATTRIBUTE):
        raise OverlaySourceError(
            f"Invalid diff module at {path}: missing module-level "
            f"'{PYTHON_DIFF_ATTRIBUTE}' mapping."
        )
    return _extract_locators(getattr(module, PYTHON_DIFF_ATTRIBUTE), path)


def _extract_locators(document: object, path: Path) -> object:
    if not isinstance(document, Mapping) or LOCATORS_PAYLOAD_KEY not in document:
        raise OverlaySourceError(
            f"Invalid locator file at {path}: expected a mapping with a "
            f"'{LOCATORS_PAYLOAD_KEY}' key."
        )
    return cast(object, document[LOCATORS_PAYLOAD_KEY])


def _load_python_module(module_path: Path) -> Any:
    """Load Python module from file path."""
    module_name = "overlay_locators_" + "".join(
        character if character.isalnum() else "_" for character in module_path.stem
    )
    spec = importlib.util.spec_from_file_location(module_name, str(module_path))
    if spec is None or spec.loader is None:
        raise OverlaySourceError(
            f"Failed to load locator module at {module_path}. Verify the file path and syntax."
        )
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as error:
        raise OverlaySourceError(
            f"Failed to execute locator module at {module_path}: {error}. "
            "Fix the module and retry."
        ) from error
    return module
