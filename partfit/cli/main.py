"""
PartFit CLI - Compatibility checks from JSON records.

Commands:
    partfit glass <screen> <glass> [--rule <rule>]   - Screen/glass verdict
    partfit display <target> <donor>                 - Display swap verdict

Shared options:
    --config <file>   - MatcherConfig overrides (JSON object)
    --json            - Print the verdict as JSON
    --explain         - Print the full explanation
    -v, --verbose     - Debug logging of every rule decision

This CLI is READ-ONLY. It cannot skip hard rules or hide rejections.
An INCOMPATIBLE verdict is a normal outcome and exits 0; unreadable or
invalid input exits 1.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from ..geometry.types import GeometryValidationError, MatchStatus
from ..matching.config import ConfigError, MatcherConfig, load_config
from ..matching.engine import CompatibilityEngine
from ..matching.explain import explain_result
from ..matching.result import MatchResult
from ..records import (
    RecordError,
    display_from_record,
    glass_from_record,
    load_record,
    result_to_record,
    rule_from_record,
    screen_from_record,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Errors that mean the caller handed us bad input
INPUT_ERRORS = (OSError, RecordError, ConfigError, GeometryValidationError)


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_status_badge(status: MatchStatus) -> str:
    """Format status as a visual badge."""
    return f"[{status.value}]"


def format_result_row(subject: str, result: MatchResult) -> str:
    """Format a verdict as a single line."""
    badge = format_status_badge(result.status)
    return (
        f"{badge} | Confidence: {result.confidence:>5.0%} | "
        f"{result.status.label} | {subject}"
    )


def format_result(subject: str, result: MatchResult) -> str:
    """Format a verdict with its warnings or rejection reasons."""
    lines = [format_result_row(subject, result)]
    for reason in result.rejection_reasons:
        lines.append(f"  x {reason}")
    for warning in result.warnings:
        lines.append(f"  ! {warning}")
    return "\n".join(lines)


def _emit(args: argparse.Namespace, subject: str, result: MatchResult, explanation: str) -> None:
    if args.json:
        print(json.dumps(result_to_record(result), indent=2))
    elif args.explain:
        print(explanation)
    else:
        print(format_result(subject, result))


def _build_engine(args: argparse.Namespace) -> CompatibilityEngine:
    config = load_config(args.config) if args.config else MatcherConfig()
    return CompatibilityEngine(config=config)


# =============================================================================
# CLI COMMANDS
# =============================================================================

def cmd_glass(args: argparse.Namespace) -> int:
    """Check a glass SKU against a screen."""
    try:
        engine = _build_engine(args)
        screen = screen_from_record(load_record(args.screen))
        glass = glass_from_record(load_record(args.glass))
        rule = rule_from_record(load_record(args.rule)) if args.rule else None
    except INPUT_ERRORS as e:
        print("ERROR: Invalid input")
        print(f"Reason: {e}")
        return 1

    result = engine.match_glass(screen, glass, rule)
    subject = f"{glass.sku_code} on {screen.screen_id}"
    _emit(args, subject, result, explain_result(result, screen, glass, engine.config))
    return 0


def cmd_display(args: argparse.Namespace) -> int:
    """Check a donor display against a target housing."""
    try:
        engine = _build_engine(args)
        target = display_from_record(load_record(args.target))
        donor = display_from_record(load_record(args.donor))
    except INPUT_ERRORS as e:
        print("ERROR: Invalid input")
        print(f"Reason: {e}")
        return 1

    result = engine.match_display(target, donor)
    subject = f"{donor.screen_id} into {target.screen_id}"
    _emit(args, subject, result, explain_result(result, config=engine.config))
    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        help="JSON file with matcher configuration overrides",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--json",
        action="store_true",
        help="Print the verdict as JSON",
    )
    output.add_argument(
        "--explain",
        action="store_true",
        help="Print the full explanation",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="partfit",
        description="PartFit Compatibility Engine - Replacement Part Fit Checks",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    # Glass command
    glass_parser = subparsers.add_parser(
        "glass",
        help="Check a tempered glass SKU against a screen",
    )
    glass_parser.add_argument("screen", help="Screen record (JSON file)")
    glass_parser.add_argument("glass", help="Glass record (JSON file)")
    glass_parser.add_argument(
        "--rule",
        help="Universal rule record (JSON file)",
    )
    _add_common_options(glass_parser)
    glass_parser.set_defaults(func=cmd_glass)

    # Display command
    display_parser = subparsers.add_parser(
        "display",
        help="Check a donor display against a target device",
    )
    display_parser.add_argument("target", help="Target display record (JSON file)")
    display_parser.add_argument("donor", help="Donor display record (JSON file)")
    _add_common_options(display_parser)
    display_parser.set_defaults(func=cmd_display)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
