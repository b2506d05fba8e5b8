"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import OverlayConfig, parse_log_level
from core.constants import DEFAULT_LOG_LEVEL
from core.errors import OverlayConfigError


def test_from_env_reads_locators_dir(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve the locator directory from environment."""
    monkeypatch.setenv("OVERLAY_LOCATORS_DIR", "./.tmp-locators")

    config = OverlayConfig.from_env()

    assert config.locators_dir.name == ".tmp-locators" and config.locators_dir.is_absolute()


def test_from_env_defaults() -> None:
    """Unset variables should fall back to defaults."""
    config = OverlayConfig.from_env()

    assert config.base_version is None and config.log_level == DEFAULT_LOG_LEVEL


def test_from_env_accepts_insider_base_version(monkeypatch: pytest.MonkeyPatch) -> None:
    """Channel-suffixed base versions are valid."""
    monkeypatch.setenv("OVERLAY_BASE_VERSION", " 1.37.0-insider ")

    assert OverlayConfig.from_env().base_version == "1.37.0-insider"


def test_from_env_raises_for_invalid_base_version(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for a non-numeric base version."""
    monkeypatch.setenv("OVERLAY_BASE_VERSION", "stable")

    with pytest.raises(OverlayConfigError):
        OverlayConfig.from_env()


def test_from_env_raises_for_invalid_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for unknown log levels."""
    monkeypatch.setenv("OVERLAY_LOG_LEVEL", "chatty")

    with pytest.raises(OverlayConfigError):
        OverlayConfig.from_env()


def test_parse_log_level_normalizes_case() -> None:
    """Level names should be case-insensitive."""
    assert parse_log_level(" debug ") == "DEBUG"
