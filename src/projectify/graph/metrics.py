"""Transitive dependent and blast radius computation."""

import logging
from collections import deque

from ..errors import InvalidStateError
from .models import GraphNode
from .storage import GraphStorage

logger = logging.getLogger(__name__)


def get_all_dependents(storage: GraphStorage, file_path: str) -> set[str]:
    """Collect every file that depends on ``file_path`` directly or indirectly.

    Breadth-first walk over the reverse (imported-by) adjacency. The start
    file is marked visited up front, so import cycles terminate and the file
    never counts as its own dependent.

    Args:
        storage: Fully built graph storage
        file_path: Canonical path of the file to start from

    Returns:
        Set of dependent file paths
    """
    dependents: set[str] = set()
    visited = {file_path}
    queue = deque([file_path])

    while queue:
        current = queue.popleft()
        for importer in storage.get_importers(current):
            if importer not in visited:
                visited.add(importer)
                dependents.add(importer)
                queue.append(importer)

    return dependents


def blast_radius(affected_files: int, total_files: int) -> float:
    """Percentage of the codebase affected by a change.

    Raises:
        InvalidStateError: If there are no files
    """
    if total_files <= 0:
        raise InvalidStateError("Blast radius is undefined for an empty file set")
    return affected_files / total_files * 100


def compute_metrics(storage: GraphStorage) -> dict[str, GraphNode]:
    """Compute degree counts and blast radius for every file.

    Must run after all edges are in place; partial adjacency gives wrong
    transitive counts.

    Args:
        storage: Fully built graph storage

    Returns:
        Mapping of file path to its GraphNode record

    Raises:
        InvalidStateError: If the graph has no files
    """
    total = len(storage)
    if total == 0:
        raise InvalidStateError("Cannot compute metrics for an empty file set")

    nodes: dict[str, GraphNode] = {}
    for file_path in storage.files():
        affected = len(get_all_dependents(storage, file_path))
        nodes[file_path] = GraphNode(
            id=file_path,
            in_degree=storage.imports_count(file_path),
            out_degree=storage.importers_count(file_path),
            affected_files=affected,
            blast_radius=blast_radius(affected, total),
        )

    logger.debug(f"Computed metrics for {total} files")
    return nodes
