"""Command-line entry point: ``cmdscaffold <commandName>``.

Generate basic command files with build and check phase.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.markup import escape

from cmdscaffold.config import CollisionPolicy, Config
from cmdscaffold.scaffolder import CommandGenerator, RunOutcome
from cmdscaffold.scaffolder.errors import InvalidCommandNameError
from cmdscaffold.utils import print_error, print_success, print_summary_table, print_warning


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdscaffold",
        description="Generate basic command files with build and check phase",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  cmdscaffold ship\n"
            "  cmdscaffold ship -p ./my-app --force\n"
            "  cmdscaffold ship --templates ./my-templates --strict\n"
        ),
    )
    parser.add_argument("command_name", metavar="commandName", help="name of the command")
    parser.add_argument(
        "--project-root", "-p",
        default=None,
        help="Project root to generate into (default: current directory)",
    )
    parser.add_argument(
        "--templates", "-t",
        default=None,
        help="Template root directory (default: bundled templates)",
    )
    collision = parser.add_mutually_exclusive_group()
    collision.add_argument(
        "--force",
        action="store_true",
        help="Overwrite files that already exist",
    )
    collision.add_argument(
        "--skip-existing",
        action="store_true",
        help="Leave files that already exist untouched",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any template unit failed",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Do not list created files",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    """Environment defaults overridden by command-line options."""
    config = Config.from_env()
    updates: dict[str, object] = {}
    if args.project_root:
        updates["project_root"] = Path(args.project_root)
    if args.templates:
        updates["template_root"] = Path(args.templates)
    if args.force:
        updates["on_existing"] = CollisionPolicy.OVERWRITE
    elif args.skip_existing:
        updates["on_existing"] = CollisionPolicy.SKIP
    return config.model_copy(update=updates)


def report(outcome: RunOutcome) -> None:
    """Print a per-unit summary followed by the completion message."""
    rows = []
    for unit in outcome.units:
        if unit.error:
            detail = escape(unit.error)
        else:
            detail = (
                f"{len(unit.written)} written, {len(unit.unchanged)} identical, "
                f"{len(unit.skipped)} skipped"
            )
        rows.append((escape(unit.unit.label), unit.status.value, detail))
    print_summary_table(rows, title=f"Command {escape(outcome.command_name)}")
    if outcome.success:
        print_success("Command generated")
    else:
        print_warning(f"Command generated with {len(outcome.failed_units)} failed unit(s)")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``cmdscaffold`` / ``python -m cmdscaffold.cli``."""
    args = build_parser().parse_args(argv)
    try:
        config = config_from_args(args)
    except ValidationError as exc:
        print_error(f"Error: invalid configuration: {escape(str(exc))}")
        return 1

    generator = CommandGenerator(config, verbose=not args.quiet)
    try:
        outcome = asyncio.run(generator.generate(args.command_name))
    except InvalidCommandNameError as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1

    report(outcome)
    if args.strict and not outcome.success:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
