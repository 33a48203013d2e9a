"""Query functions for inspecting a built dependency graph."""

import logging
import os
from typing import Any

import networkx as nx

from .dependency_graph import DependencyGraph
from .models import GraphNode

logger = logging.getLogger(__name__)


def node_summary(node: GraphNode) -> dict[str, Any]:
    """Serialize a node record with a display name."""
    return {
        "name": os.path.basename(node.id),
        **node.model_dump(),
    }


def get_top_risks(graph: DependencyGraph, limit: int = 5) -> list[dict[str, Any]]:
    """Get the highest blast radius files as plain dictionaries.

    Args:
        graph: Built dependency graph
        limit: Maximum number of files to return

    Returns:
        List of node summaries, highest blast radius first
    """
    return [node_summary(node) for node in graph.get_top_blast_radius(limit)]


def get_file_dependencies(graph: DependencyGraph, file_path: str) -> list[dict[str, Any]]:
    """Get all known files that a file imports.

    Args:
        graph: Built dependency graph
        file_path: Canonical path of the file to query

    Returns:
        List of imported file details
    """
    result = []
    for target in graph.get_dependencies(file_path):
        node = graph.get_node(target)
        if node:
            result.append(node_summary(node))
    return result


def get_file_dependents(graph: DependencyGraph, file_path: str) -> list[dict[str, Any]]:
    """Get all known files that directly import a file.

    Args:
        graph: Built dependency graph
        file_path: Canonical path of the file to query

    Returns:
        List of importing file details
    """
    result = []
    for source in graph.get_dependents(file_path):
        node = graph.get_node(source)
        if node:
            result.append(node_summary(node))
    return result


def get_file_impact(graph: DependencyGraph, file_path: str) -> dict[str, Any]:
    """Get the full impact picture for a file.

    Args:
        graph: Built dependency graph
        file_path: Canonical path of the file

    Returns:
        Node metrics plus direct and transitive dependents, or an error entry
    """
    node = graph.get_node(file_path)
    if node is None:
        return {"error": f"File not found: {file_path}"}

    return {
        **node_summary(node),
        "imports": graph.get_dependencies(file_path),
        "imported_by": graph.get_dependents(file_path),
        "transitive_dependents": graph.get_transitive_dependents(file_path),
    }


def find_import_paths(
    graph: DependencyGraph,
    source: str,
    target: str,
    max_length: int = 10,
) -> list[list[str]]:
    """Find the import chains leading from one file to another.

    Args:
        graph: Built dependency graph
        source: File doing the (indirect) importing
        target: File being (indirectly) imported
        max_length: Maximum chain length

    Returns:
        List of paths (each path is a list of file paths)
    """
    try:
        return [
            list(path)
            for path in nx.all_simple_paths(graph.storage.graph, source, target, cutoff=max_length)
        ]
    except (nx.NetworkXError, nx.NodeNotFound):
        return []


def get_connected_components(graph: DependencyGraph) -> list[list[str]]:
    """Get groups of files connected by imports, largest group first.

    Args:
        graph: Built dependency graph

    Returns:
        List of components, each a sorted list of file paths
    """
    components = [sorted(comp) for comp in nx.weakly_connected_components(graph.storage.graph)]
    components.sort(key=lambda comp: (-len(comp), comp[0]))
    return components
