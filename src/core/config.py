"""Runtime configuration model for the locator overlay.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_LOCATORS_DIR, DEFAULT_LOG_LEVEL, SUPPORTED_LOG_LEVELS
from core.errors import InvalidVersionFormatError, OverlayConfigError
from locators.version import parse_version


@dataclass(frozen=True)
class OverlayConfig:
    """Validated runtime configuration.

    Attributes:
        locators_dir: Directory holding the baseline and per-version diff files.
        base_version: Optional version identifier of the baseline file.
        log_level: Minimum structured log level.
    """

    locators_dir: Path
    base_version: str | None
    log_level: str

    @classmethod
    def from_env(cls) -> "OverlayConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            OverlayConfigError: If environment values are invalid.
        """
        locators_dir_value = os.getenv("OVERLAY_LOCATORS_DIR", str(DEFAULT_LOCATORS_DIR))
        base_version = _parse_base_version(os.getenv("OVERLAY_BASE_VERSION"))
        log_level = parse_log_level(os.getenv("OVERLAY_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        return cls(
            locators_dir=Path(locators_dir_value).expanduser().resolve(),
            base_version=base_version,
            log_level=log_level,
        )


def parse_log_level(raw_value: str) -> str:
    """Normalize and validate a log level name.

    Args:
        raw_value: Raw level name from environment or CLI.

    Returns:
        Upper-case level name.

    Raises:
        OverlayConfigError: If the level is not supported.
    """
    normalized_value = raw_value.strip().upper()
    if normalized_value not in SUPPORTED_LOG_LEVELS:
        raise OverlayConfigError(
            f"Invalid OVERLAY_LOG_LEVEL value '{raw_value}'. "
            f"Use one of: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return normalized_value


def _parse_base_version(raw_value: str | None) -> str | None:
    if raw_value is None or not raw_value.strip():
        return None
    normalized_value = raw_value.strip()
    try:
        parse_version(normalized_value)
    except InvalidVersionFormatError as error:
        raise OverlayConfigError(
            f"Invalid OVERLAY_BASE_VERSION value: {error} "
            "Set OVERLAY_BASE_VERSION to a dotted numeric version such as 1.37.0."
        ) from error
    return normalized_value
