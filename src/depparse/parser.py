# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Batch parsing of dependency lines from text sources."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from depparse.arbiter import RuleRegistry
from depparse.classifier import DependencyFound, Ignored, Rejected, classify_line
from depparse.model import Dependency

logger = logging.getLogger(__name__)


class LineProcessingError(RuntimeError):
    """Represent a fatal failure while obtaining or classifying one line.

    Attributes:
        raw_line: Line being processed, ``None`` when it could not be read.
        line_number: 1-based line number within ``source``, when known.
        source: Input the line came from, when known.
    """

    def __init__(
        self,
        message: str,
        raw_line: str | None = None,
        line_number: int | None = None,
        source: str | None = None,
    ) -> None:
        super().__init__(message)
        self.raw_line = raw_line
        self.line_number = line_number
        self.source = source


@dataclass(frozen=True)
class ParseResult:
    """Represent the outcome of parsing one batch of lines.

    Attributes:
        dependencies: Extracted dependencies in input order.
        ignored_line_count: Lines that held no dependency, rejections included.
        parse_error_line_count: Lines rejected as malformed dependencies.
    """

    dependencies: list[Dependency]
    ignored_line_count: int
    parse_error_line_count: int


class DependenciesParser:
    """Parse dependency declarations from ``dependency:list`` and WORKSPACE text.

    Counters accumulate over every batch parsed by the same instance, so one
    parser can read several input files and report combined totals.
    """

    def __init__(
        self, registry: RuleRegistry | None = None, strict_layout: bool = False
    ) -> None:
        """Initialize parser.

        Args:
            registry: Optional arbiter registry receiving ``# RULE`` lines.
            strict_layout: Reject ambiguous five-part dependency-list lines.
        """
        self.registry = registry
        self.strict_layout = strict_layout
        self.ignored_line_count = 0
        self.parse_error_line_count = 0

    def parse_file(self, path: Path) -> list[Dependency]:
        """Parse every line of a text file.

        Args:
            path: Input file.

        Returns:
            Dependencies found in the file.

        Raises:
            LineProcessingError: If the file cannot be read or a line fails.
        """
        return self.process_lines(read_file_lines(path), source=str(path)).dependencies

    def parse_files(self, paths: Iterable[Path]) -> list[Dependency]:
        """Parse several files in order and concatenate their dependencies."""
        dependencies: list[Dependency] = []
        for path in paths:
            dependencies.extend(self.parse_file(path))
        return dependencies

    def parse_lines(self, lines: Iterable[str]) -> list[Dependency]:
        """Parse raw lines and return the dependencies found in them."""
        return self.process_lines(lines).dependencies

    def process_lines(
        self, lines: Iterable[str], source: str | None = None
    ) -> ParseResult:
        """Classify lines in order and aggregate dependencies and counters.

        Args:
            lines: Raw lines, materialized or lazy.
            source: Optional input name used in diagnostics.

        Returns:
            Dependencies and counters for this batch only.

        Raises:
            LineProcessingError: If a line cannot be obtained or classification
                fails unexpectedly. The batch is aborted.
        """
        dependencies: list[Dependency] = []
        ignored = 0
        parse_errors = 0
        line_number = 0
        iterator = iter(lines)

        while True:
            try:
                raw_line = next(iterator)
            except StopIteration:
                break
            except Exception as exc:
                raise self._failure(exc, None, line_number + 1, source) from exc
            line_number += 1

            try:
                outcome = classify_line(
                    raw_line, registry=self.registry, strict_layout=self.strict_layout
                )
            except Exception as exc:
                raise self._failure(exc, raw_line, line_number, source) from exc

            if isinstance(outcome, DependencyFound):
                dependencies.append(outcome.dependency)
            elif isinstance(outcome, Ignored):
                ignored += 1
            elif isinstance(outcome, Rejected):
                ignored += 1
                parse_errors += 1

        self.ignored_line_count += ignored
        self.parse_error_line_count += parse_errors
        logger.info(
            f"Parsed lines (source={source} lines={line_number} dependencies={len(dependencies)} ignored={ignored} parse_errors={parse_errors})"
        )
        return ParseResult(
            dependencies=dependencies,
            ignored_line_count=ignored,
            parse_error_line_count=parse_errors,
        )

    def _failure(
        self,
        exc: Exception,
        raw_line: str | None,
        line_number: int,
        source: str | None,
    ) -> LineProcessingError:
        logger.error(
            f"Failure parsing line (source={source} line_number={line_number} line={raw_line!r} error={exc})"
        )
        return LineProcessingError(
            f"Failure parsing line {line_number} of {source or '<lines>'}: {exc}",
            raw_line=raw_line,
            line_number=line_number,
            source=source,
        )


def read_file_lines(path: Path) -> Iterator[str]:
    """Yield lines of a text file without their line terminators.

    Args:
        path: Input file, decoded with the platform default encoding.

    Yields:
        Lines in file order.

    Raises:
        LineProcessingError: If the file cannot be opened.
    """
    try:
        handle = path.open()
    except OSError as exc:
        logger.error(f"Failed to open input file (path={path} error={exc})")
        raise LineProcessingError(
            f"Failed to open input file {path}: {exc}", source=str(path)
        ) from exc
    return _iter_lines(handle)


def _iter_lines(handle: TextIO) -> Iterator[str]:
    with handle:
        for line in handle:
            yield line.rstrip("\r\n")
