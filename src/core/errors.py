"""Overlay exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class OverlayError(Exception):
    """Base exception for all locator overlay failures."""


class OverlayConfigError(OverlayError):
    """Raised for invalid runtime configuration."""


class InvalidVersionFormatError(OverlayError):
    """Raised when a version identifier cannot be parsed into numeric segments."""


class OverlaySourceError(OverlayError):
    """Raised when a locator backing store cannot be opened or read."""


class OverlayDependencyError(OverlayError):
    """Raised when an optional runtime dependency is missing."""
