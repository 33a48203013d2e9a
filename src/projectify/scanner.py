"""File system scanner that inventories the files of a project."""

import fnmatch
import logging
from collections.abc import Iterable
from pathlib import Path

from .parser.languages import is_text_file, should_ignore_path

logger = logging.getLogger(__name__)


def _matches_any(relative_path: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(relative_path, pattern) for pattern in patterns)


def scan_project(project_path: Path | str, ignore: Iterable[str] | None = None) -> list[str]:
    """Find every text file in a project.

    Skips ignored directories (VCS metadata, dependency folders, build
    output, hidden directories), binary files, and any file whose path
    relative to the project root matches one of the ``ignore`` globs.

    Args:
        project_path: Root directory of the project
        ignore: Extra glob patterns to skip (e.g. "**/*.min.js")

    Returns:
        Sorted list of absolute, resolved file paths
    """
    root = Path(project_path).resolve()
    patterns = list(ignore or [])

    if not root.is_dir():
        raise NotADirectoryError(f"Project path is not a directory: {root}")

    files: list[str] = []
    for file_path in root.rglob("*"):
        if not file_path.is_file():
            continue

        relative = file_path.relative_to(root)
        if should_ignore_path(relative):
            continue
        if not is_text_file(file_path):
            continue
        if patterns and _matches_any(relative.as_posix(), patterns):
            continue

        files.append(str(file_path))

    files.sort()
    logger.info(f"Found {len(files)} files in {root}")
    return files
