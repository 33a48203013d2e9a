"""Graph storage using NetworkX for the in-memory file dependency graph."""

import logging
from typing import Any

import networkx as nx

logger = logging.getLogger(__name__)


class GraphStorage:
    """In-memory file graph backed by a NetworkX DiGraph.

    Nodes are canonical file paths. An edge ``a -> b`` means file ``a``
    imports file ``b``. NetworkX keeps successor and predecessor adjacency
    side by side, so both "what does this import" and "who imports this" are
    constant-time lookups.

    Note on degree naming: NetworkX's ``in_degree`` counts predecessors
    (importers). The graph records expose ``in_degree`` as imports made and
    ``out_degree`` as imported-by, so the accessors below are named by
    meaning rather than by NetworkX convention.
    """

    def __init__(self):
        """Initialize an empty directed graph."""
        self._graph = nx.DiGraph()

    @property
    def graph(self) -> nx.DiGraph:
        """Access the underlying NetworkX graph."""
        return self._graph

    def add_file(self, file_path: str, **attrs: Any) -> None:
        """Add a file as a node in the graph.

        Args:
            file_path: Canonical path of the file
            **attrs: Extra node attributes (e.g. language)
        """
        self._graph.add_node(file_path, **attrs)

    def has_file(self, file_path: str) -> bool:
        """Check if a file is part of the graph.

        Args:
            file_path: Canonical path of the file

        Returns:
            True if the file is a node
        """
        return file_path in self._graph

    def add_import(self, from_path: str, to_path: str) -> bool:
        """Add an import edge between two known files.

        Args:
            from_path: File that contains the import
            to_path: File being imported

        Returns:
            True if a new edge was created, False if it already existed or
            either end is not a known file
        """
        if from_path not in self._graph or to_path not in self._graph:
            return False
        if self._graph.has_edge(from_path, to_path):
            return False
        self._graph.add_edge(from_path, to_path)
        return True

    def get_imports(self, file_path: str) -> set[str]:
        """Get the files directly imported by a file (forward adjacency)."""
        if file_path not in self._graph:
            return set()
        return set(self._graph.successors(file_path))

    def get_importers(self, file_path: str) -> set[str]:
        """Get the files that directly import a file (reverse adjacency)."""
        if file_path not in self._graph:
            return set()
        return set(self._graph.predecessors(file_path))

    def imports_count(self, file_path: str) -> int:
        """Number of distinct files imported by ``file_path``."""
        return self._graph.out_degree(file_path)

    def importers_count(self, file_path: str) -> int:
        """Number of distinct files importing ``file_path``."""
        return self._graph.in_degree(file_path)

    def files(self) -> list[str]:
        """Get all file paths in the graph."""
        return list(self._graph.nodes)

    def get_statistics(self) -> dict[str, int]:
        """Get graph statistics.

        Returns:
            Dictionary with counts of files, edges, files with dependents
            and isolated files
        """
        stats = {
            "files": self._graph.number_of_nodes(),
            "edges": self._graph.number_of_edges(),
            "with_dependents": 0,
            "isolated": 0,
        }

        for node_id in self._graph.nodes:
            if self._graph.in_degree(node_id) > 0:
                stats["with_dependents"] += 1
            if self._graph.degree(node_id) == 0:
                stats["isolated"] += 1

        return stats

    def freeze(self) -> None:
        """Make the underlying graph read-only."""
        nx.freeze(self._graph)

    @property
    def is_frozen(self) -> bool:
        """Check if the graph has been frozen."""
        return nx.is_frozen(self._graph)

    def __len__(self) -> int:
        return self._graph.number_of_nodes()
