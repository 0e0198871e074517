# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Input file discovery for dependency parsing."""

import logging
from collections.abc import Iterable
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)


class InputDiscoveryError(RuntimeError):
    """Represent an input path that cannot be used."""


def discover_input_files(
    paths: Iterable[Path], exclude_patterns: Iterable[str] = ()
) -> list[Path]:
    """Expand files and directories into an ordered list of input files.

    Files are kept in the order given. Directories are walked recursively and
    their files sorted; gitignore-style ``exclude_patterns`` are matched
    against paths relative to the directory being walked.

    Args:
        paths: Input files or directories.
        exclude_patterns: Gitignore-style patterns applied inside directories.

    Returns:
        Input files in parse order.

    Raises:
        InputDiscoveryError: If a path does not exist.
    """
    spec = pathspec.GitIgnoreSpec.from_lines(list(exclude_patterns))
    files: list[Path] = []
    for path in paths:
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            files.extend(_walk_directory(path, spec))
        else:
            logger.warning(f"Input path does not exist (path={path})")
            raise InputDiscoveryError(f"Input path does not exist: {path}")
    return files


def _walk_directory(root: Path, spec: pathspec.GitIgnoreSpec) -> list[Path]:
    selected: list[Path] = []
    for candidate in sorted(root.rglob("*")):
        if not candidate.is_file():
            continue
        relative = candidate.relative_to(root).as_posix()
        if spec.match_file(relative):
            logger.debug(f"Skipping excluded input (path={relative})")
            continue
        selected.append(candidate)
    return selected
