"""Graph builder for constructing the file dependency graph from collected facts."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..parser.facts import FileFacts, ProjectAnalysis
from .dependency_graph import DependencyGraph
from .import_resolver import ImportResolver, canonical_path
from .metrics import compute_metrics
from .storage import GraphStorage

logger = logging.getLogger(__name__)

FactsInput = ProjectAnalysis | Mapping[str, FileFacts | Mapping[str, Any] | Iterable[str]]


def _extract_imports(facts: FileFacts | Mapping[str, Any] | Iterable[str]) -> list[str]:
    """Pull the raw import list out of any supported per-file record."""
    if isinstance(facts, FileFacts):
        return list(facts.imports)
    if isinstance(facts, Mapping):
        return list(facts.get("imports") or [])
    if isinstance(facts, str):
        return [facts]
    return list(facts)


def _extract_language(facts: FileFacts | Mapping[str, Any] | Iterable[str]) -> str | None:
    if isinstance(facts, FileFacts):
        return facts.language
    if isinstance(facts, Mapping):
        return facts.get("language")
    return None


class GraphBuilder:
    """Builds a dependency graph from a snapshot of files and their imports."""

    def __init__(self, storage: GraphStorage | None = None):
        """Initialize the graph builder.

        Args:
            storage: GraphStorage instance to build into (a new one by default)
        """
        self._storage = storage if storage is not None else GraphStorage()
        self._import_resolver = ImportResolver()
        self._unresolved_imports = 0

    @property
    def storage(self) -> GraphStorage:
        """Access the underlying graph storage."""
        return self._storage

    @property
    def unresolved_imports(self) -> int:
        """Number of import strings that did not resolve to a known file."""
        return self._unresolved_imports

    def build_from_facts(self, files: FactsInput) -> None:
        """Add every file as a node, then resolve imports into edges.

        This is a two-pass process so that imports of files listed later in
        the input still resolve:
        1. First pass: add all nodes and register known files
        2. Second pass: resolve imports and add edges

        Args:
            files: ProjectAnalysis or mapping of path to per-file facts
        """
        if isinstance(files, ProjectAnalysis):
            files = files.files

        imports_by_file: dict[str, list[str]] = {}
        languages: dict[str, str] = {}
        for path, facts in files.items():
            file_path = canonical_path(path)
            imports = _extract_imports(facts)
            if file_path in imports_by_file:
                logger.warning(f"Several entries normalize to {file_path}, merging their imports")
                imports_by_file[file_path].extend(imports)
            else:
                imports_by_file[file_path] = imports

            language = _extract_language(facts)
            if language:
                languages.setdefault(file_path, language)

        logger.info(f"Building dependency graph from {len(imports_by_file)} files")
        self._import_resolver.set_known_files(imports_by_file.keys())

        # First pass: add all nodes
        for file_path in imports_by_file:
            if file_path in languages:
                self._storage.add_file(file_path, language=languages[file_path])
            else:
                self._storage.add_file(file_path)

        # Second pass: build import edges
        for file_path, imports in imports_by_file.items():
            self._build_file_edges(file_path, imports)

        stats = self._storage.get_statistics()
        logger.info(
            f"Graph built: {stats['files']} files, {stats['edges']} edges, "
            f"{self._unresolved_imports} unresolved imports"
        )

    def _build_file_edges(self, file_path: str, imports: list[str]) -> None:
        """Resolve a file's imports and add an edge for each hit.

        Args:
            file_path: Canonical path of the importing file
            imports: Raw import strings from that file
        """
        for import_path in imports:
            resolved = self._import_resolver.resolve(import_path, file_path)
            if resolved.resolved_path is None:
                self._unresolved_imports += 1
                continue
            # Duplicate imports of the same target are no-ops in storage
            self._storage.add_import(file_path, resolved.resolved_path)

    def build(self) -> DependencyGraph:
        """Compute metrics and return the finished, read-only graph.

        Raises:
            InvalidStateError: If no files were added
        """
        nodes = compute_metrics(self._storage)
        return DependencyGraph(self._storage, nodes, unresolved_imports=self._unresolved_imports)


def build_dependency_graph(files: FactsInput) -> DependencyGraph:
    """Build a dependency graph and compute blast radius metrics in one step.

    Args:
        files: ProjectAnalysis, or a mapping of file path to FileFacts, to a
            mapping with an ``imports`` key, or to a sequence of import strings

    Returns:
        Fully built, read-only DependencyGraph

    Raises:
        InvalidStateError: If ``files`` is empty
    """
    builder = GraphBuilder()
    builder.build_from_facts(files)
    return builder.build()
