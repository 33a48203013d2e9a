"""Collects facts for a list of files into a ProjectAnalysis."""

import logging
from collections.abc import Iterable
from pathlib import Path

from .errors import InvalidStateError
from .graph import DependencyGraph, build_dependency_graph
from .parser import ProjectAnalysis, TreeSitterParser, is_manifest, parse_manifest
from .scanner import scan_project

logger = logging.getLogger(__name__)


def analyze_files(
    file_paths: Iterable[str],
    parser: TreeSitterParser | None = None,
) -> ProjectAnalysis:
    """Read and parse every file, collecting imports and manifest dependencies.

    Files that cannot be read are logged and left out of the result; they
    still count towards ``file_count``.

    Args:
        file_paths: Paths of the files to analyze
        parser: Parser to use (a new one by default)

    Returns:
        ProjectAnalysis keyed by the given paths
    """
    parser = parser or TreeSitterParser()
    file_paths = list(file_paths)
    analysis = ProjectAnalysis(file_count=len(file_paths))

    for file_path in file_paths:
        try:
            content = Path(file_path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.error(f"Error reading file {file_path}: {e}")
            continue

        if is_manifest(file_path):
            analysis.dependencies.update(parse_manifest(file_path, content))

        analysis.files[file_path] = parser.parse_source(content, file_path)

    logger.info(
        f"Analyzed {len(analysis.files)} of {analysis.file_count} files, "
        f"{len(analysis.dependencies)} third-party dependencies"
    )
    return analysis


def analyze_project(
    project_path: Path | str,
    ignore: Iterable[str] | None = None,
    parser: TreeSitterParser | None = None,
) -> ProjectAnalysis:
    """Scan a project directory and analyze every file found.

    Args:
        project_path: Root directory of the project
        ignore: Extra glob patterns to skip
        parser: Parser to use (a new one by default)

    Returns:
        ProjectAnalysis for the project
    """
    return analyze_files(scan_project(project_path, ignore), parser)


def run_analysis(
    project_path: Path | str,
    ignore: Iterable[str] | None = None,
    parser: TreeSitterParser | None = None,
) -> tuple[ProjectAnalysis, DependencyGraph]:
    """Scan, parse and build the dependency graph for a project.

    Args:
        project_path: Root directory of the project
        ignore: Extra glob patterns to skip
        parser: Parser to use (a new one by default)

    Returns:
        Tuple of the collected facts and the built graph

    Raises:
        InvalidStateError: If no readable files were found
    """
    analysis = analyze_project(project_path, ignore, parser)
    if not analysis.files:
        raise InvalidStateError(f"No files to analyze in {project_path}")

    graph = build_dependency_graph(analysis)
    return analysis, graph
