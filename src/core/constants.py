"""Core constants used across overlay modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_LOCATORS_DIR = Path("locators")
DEFAULT_LOG_LEVEL = "WARNING"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
VERSION_SEGMENT_SEPARATOR = "."
VERSION_CHANNEL_SEPARATOR = "-"
LOCATORS_PAYLOAD_KEY = "locators"
PYTHON_DIFF_ATTRIBUTE = "diff"
PYTHON_BASELINE_ATTRIBUTE = "locators"
YAML_FILE_EXTENSIONS = (".yaml", ".yml")
JSON_FILE_EXTENSIONS = (".json",)
PYTHON_FILE_EXTENSIONS = (".py",)
SUPPORTED_LOCATOR_FILE_EXTENSIONS = (
    YAML_FILE_EXTENSIONS + JSON_FILE_EXTENSIONS + PYTHON_FILE_EXTENSIONS
)
SUPPORTED_OUTPUT_FORMATS = ("json", "yaml")
DEFAULT_OUTPUT_FORMAT = "json"
