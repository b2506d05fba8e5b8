"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest
import structlog


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clear_overlay_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from OVERLAY_* variables in the developer shell."""
    for name in ("OVERLAY_LOCATORS_DIR", "OVERLAY_BASE_VERSION", "OVERLAY_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Drop logging configuration installed by CLI runs after each test."""
    yield
    structlog.reset_defaults()
