"""Overlay CLI entry points.
This module exposes commands for inspecting and resolving locator overlays.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping, Sequence

from core.config import OverlayConfig, parse_log_level
from core.constants import DEFAULT_OUTPUT_FORMAT, SUPPORTED_LOG_LEVELS, SUPPORTED_OUTPUT_FORMATS
from core.errors import OverlayDependencyError, OverlayError
from core.logging_config import configure_logging
from locators.loader import LocatorLoader
from locators.tree_merge import node_kind
from locators.version import version_ordering


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="overlay", description="Versioned locator overlay CLI")
    parser.add_argument("--locators-dir", help="Override OVERLAY_LOCATORS_DIR for this command")
    parser.add_argument("--base-version", help="Override OVERLAY_BASE_VERSION for this command")
    parser.add_argument(
        "--log-level",
        choices=SUPPORTED_LOG_LEVELS,
        help="Override OVERLAY_LOG_LEVEL for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_versions_command(subparsers)
    _add_resolve_command(subparsers)
    _add_plan_command(subparsers)
    _add_compare_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the overlay CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
        configure_logging(config.log_level)
        if args.command == "compare":
            return _run_compare_command(args)
        loader = LocatorLoader.from_config(config)
        if args.command == "versions":
            return _run_versions_command(loader)
        if args.command == "resolve":
            return _run_resolve_command(loader, args)
        if args.command == "plan":
            return _run_plan_command(loader, args)
    except OverlayError as error:
        print(f"error: {error}", file=sys.stderr)
        return 2
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> OverlayConfig:
    """Build config with optional CLI overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured runtime config.
    """
    config = OverlayConfig.from_env()
    if args.locators_dir:
        config = replace(config, locators_dir=Path(args.locators_dir).expanduser().resolve())
    if args.base_version:
        config = replace(config, base_version=args.base_version)
    if args.log_level:
        config = replace(config, log_level=parse_log_level(args.log_level))
    return config


def _run_versions_command(loader: LocatorLoader) -> int:
    """Handle versions command.

    Args:
        loader: Locator loader.

    Returns:
        Exit code.
    """
    for version in loader.catalog.list_available():
        print(version)
    for warning in loader.diagnostics:
        print(f"warning: {warning.describe()}", file=sys.stderr)
    return 0


def _run_resolve_command(loader: LocatorLoader, args: argparse.Namespace) -> int:
    """Handle resolve command.

    Args:
        loader: Locator loader.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    resolved = loader.load_locators(args.target)
    print(_render_tree(resolved, args.format))
    return 0


def _run_plan_command(loader: LocatorLoader, args: argparse.Namespace) -> int:
    """Handle plan command.

    Args:
        loader: Locator loader.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    plan = loader.plan(args.target)
    print(f"direction={plan.direction}")
    for entry in plan.entries:
        print(f"{entry.version}\t{entry.location}")
    return 0


def _run_compare_command(args: argparse.Namespace) -> int:
    """Handle compare command."""
    print(version_ordering(args.left, args.right))
    return 0


def _render_tree(tree: Mapping[str, Any], output_format: str) -> str:
    printable = _printable_node(tree)
    if output_format == "yaml":
        try:
            import yaml  # type: ignore[import-untyped]
        except ImportError as error:  # pragma: no cover - dependency failure
            raise OverlayDependencyError(
                "YAML output requires PyYAML. Install with 'pip install pyyaml'."
            ) from error
        return str(yaml.safe_dump(printable, sort_keys=True)).rstrip("\n")
    return json.dumps(printable, indent=2, sort_keys=True)


def _printable_node(value: object) -> object:
    if node_kind(value) == "composite":
        return {str(key): _printable_node(child) for key, child in value.items()}  # type: ignore[attr-defined]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return repr(value)


def _add_versions_command(subparsers: Any) -> None:
    """Register versions subcommand."""
    subparsers.add_parser("versions", help="List versions with explicit locator diffs")


def _add_resolve_command(subparsers: Any) -> None:
    """Register resolve subcommand."""
    parser = subparsers.add_parser("resolve", help="Print the resolved locator tree")
    parser.add_argument("target", help="Target application version, e.g. 1.87.2-insider")
    parser.add_argument(
        "--format",
        default=DEFAULT_OUTPUT_FORMAT,
        choices=SUPPORTED_OUTPUT_FORMATS,
        help="Output format",
    )


def _add_plan_command(subparsers: Any) -> None:
    """Register plan subcommand."""
    parser = subparsers.add_parser("plan", help="Show which diffs a resolution applies")
    parser.add_argument("target", help="Target application version")


def _add_compare_command(subparsers: Any) -> None:
    """Register compare subcommand."""
    parser = subparsers.add_parser("compare", help="Compare two version identifiers")
    parser.add_argument("left", help="Left version")
    parser.add_argument("right", help="Right version")
