# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""CLI harness for parsing dependency declarations."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from depparse.arbiter import ArbiterRule, InMemoryRuleRegistry
from depparse.inputs import InputDiscoveryError, discover_input_files
from depparse.model import Dependency
from depparse.parser import DependenciesParser, LineProcessingError

logger = logging.getLogger(__name__)

TABLE_COLUMN_RATIOS: dict[str, int] = {
    "group": 3,
    "artifact": 3,
    "version": 2,
    "scope": 1,
    "classifier": 2,
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="depparse")
    subparsers = parser.add_subparsers(dest="command", required=True)
    parse_parser = subparsers.add_parser("parse")
    parse_parser.add_argument(
        "--path",
        required=True,
        action="append",
        help="Input file or directory; repeat to parse several inputs in order.",
    )
    parse_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Gitignore-style pattern excluding files inside input directories.",
    )
    parse_parser.add_argument(
        "--format",
        choices=("table", "json"),
        default="table",
        help="Output format.",
    )
    parse_parser.add_argument(
        "--output",
        required=False,
        help="Optional output file path for raw JSON when --format json is used.",
    )
    parse_parser.add_argument(
        "--strict-layout",
        action="store_true",
        help="Reject five-part dependency-list lines with an unknown scope.",
    )
    parse_parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging severity threshold.",
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    logging.getLogger().setLevel(args.log_level)
    if args.command == "parse":
        return _run_parse(args=args, stdout=stdout, stderr=stderr)

    logger.warning(f"Unsupported command (command={args.command})")
    stderr.write(f"Unsupported command: {args.command}\n")
    return 2


def _run_parse(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    """Run parse command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    try:
        input_files = discover_input_files(
            [Path(path) for path in args.path], exclude_patterns=args.exclude
        )
    except InputDiscoveryError as exc:
        stderr.write(f"{exc}\n")
        return 2

    registry = InMemoryRuleRegistry()
    dependency_parser = DependenciesParser(
        registry=registry, strict_layout=args.strict_layout
    )
    try:
        dependencies = dependency_parser.parse_files(input_files)
    except LineProcessingError as exc:
        stderr.write(f"Failure parsing line: {exc.raw_line}\n")
        stderr.write(f"{exc}\n")
        return 2

    logger.info(
        f"Parse completed (files={len(input_files)} dependencies={len(dependencies)} ignored={dependency_parser.ignored_line_count} parse_errors={dependency_parser.parse_error_line_count})"
    )
    payload = _build_payload(
        dependencies=dependencies,
        rules=registry.rules,
        parser=dependency_parser,
    )
    if args.format == "json":
        if args.output:
            try:
                _write_json_file(payload=payload, output_path=Path(args.output))
            except OSError as exc:
                logger.warning(
                    f"Failed to write JSON output file (output_path={args.output} error={exc})"
                )
                stderr.write(f"Failed to write JSON output file: {args.output}\n")
                return 2
        else:
            _write_json(payload=payload, stdout=stdout)
    else:
        _write_table(
            dependencies=dependencies, parser=dependency_parser, stdout=stdout
        )
    return 0


def _build_payload(
    dependencies: list[Dependency],
    rules: list[ArbiterRule],
    parser: DependenciesParser,
) -> dict[str, object]:
    return {
        "dependencies": [asdict(dependency) for dependency in dependencies],
        "rules": [asdict(rule) for rule in rules],
        "ignored_line_count": parser.ignored_line_count,
        "parse_error_line_count": parser.parse_error_line_count,
    }


def _write_json(payload: dict[str, object], stdout: TextIO) -> None:
    """Write the parse payload in JSON format.

    Args:
        payload: Serializable parse summary.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print(
        json.dumps(payload, indent=2, sort_keys=True),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _write_json_file(payload: dict[str, object], output_path: Path) -> None:
    """Write raw JSON payload to an output file.

    Args:
        payload: Serializable parse summary.
        output_path: Target file path.

    Raises:
        OSError: If directory creation or file writing fails.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
    )


def _write_table(
    dependencies: list[Dependency], parser: DependenciesParser, stdout: TextIO
) -> None:
    """Write dependencies as a Rich table followed by a counter summary.

    Args:
        dependencies: Parsed dependencies in input order.
        parser: Parser holding the accumulated line counters.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    table = Table(show_header=True, expand=True)
    for column, ratio in TABLE_COLUMN_RATIOS.items():
        table.add_column(column, ratio=ratio, overflow="fold")
    for dependency in dependencies:
        table.add_row(
            dependency.group,
            dependency.artifact,
            dependency.version,
            dependency.scope,
            dependency.classifier or "",
        )
    console.print(table)
    console.print(
        f"dependencies={len(dependencies)} ignored={parser.ignored_line_count} parse_errors={parser.parse_error_line_count}",
        markup=False,
        highlight=False,
    )


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
