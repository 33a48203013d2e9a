"""Read-only dependency graph produced by a single analysis run."""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from .metrics import get_all_dependents
from .models import GraphNode
from .storage import GraphStorage

logger = logging.getLogger(__name__)


class DependencyGraph:
    """File dependency graph with precomputed blast radius metrics.

    Instances are created by ``build_dependency_graph`` and are not meant to
    be mutated afterwards: the underlying NetworkX graph is frozen and the
    node and edge views are read-only.
    """

    def __init__(
        self,
        storage: GraphStorage,
        nodes: Mapping[str, GraphNode],
        unresolved_imports: int = 0,
    ):
        """Wrap a fully built storage and its computed node records.

        Args:
            storage: Graph storage with every file and edge in place
            nodes: GraphNode record per file path
            unresolved_imports: Number of import strings that matched no file
        """
        if not storage.is_frozen:
            storage.freeze()
        self._storage = storage
        self._nodes = MappingProxyType(dict(nodes))
        self._edges = MappingProxyType({
            file_path: frozenset(storage.get_imports(file_path))
            for file_path in storage.files()
        })
        self._unresolved_imports = unresolved_imports

    @property
    def storage(self) -> GraphStorage:
        """Access the underlying (frozen) graph storage."""
        return self._storage

    def get_nodes(self) -> Mapping[str, GraphNode]:
        """Read-only view of all node records, keyed by path."""
        return self._nodes

    def get_edges(self) -> Mapping[str, frozenset[str]]:
        """Read-only forward adjacency: path -> paths it imports directly."""
        return self._edges

    def get_node(self, file_path: str) -> GraphNode | None:
        """Get the node record for a path, if known."""
        return self._nodes.get(file_path)

    def get_top_blast_radius(self, limit: int = 5) -> list[GraphNode]:
        """Get the files with the highest blast radius.

        Ties are ordered by ascending path so results are deterministic.

        Args:
            limit: Maximum number of nodes to return (must be >= 0)

        Returns:
            Up to ``limit`` nodes, highest blast radius first

        Raises:
            ValueError: If limit is negative
        """
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")

        ranked = sorted(self._nodes.values(), key=lambda node: (-node.blast_radius, node.id))
        return ranked[:limit]

    def get_dependencies(self, file_path: str) -> list[str]:
        """Files directly imported by ``file_path``, sorted."""
        return sorted(self._edges.get(file_path, ()))

    def get_dependents(self, file_path: str) -> list[str]:
        """Files directly importing ``file_path``, sorted."""
        return sorted(self._storage.get_importers(file_path))

    def get_transitive_dependents(self, file_path: str) -> list[str]:
        """Every file that depends on ``file_path`` directly or indirectly, sorted."""
        if not self._storage.has_file(file_path):
            return []
        return sorted(get_all_dependents(self._storage, file_path))

    def get_statistics(self) -> dict[str, int]:
        """Get graph statistics.

        Returns:
            Dictionary with counts of files, edges, unresolved imports,
            files with dependents and isolated files
        """
        stats = self._storage.get_statistics()
        stats["unresolved_imports"] = self._unresolved_imports
        return stats

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, file_path: object) -> bool:
        return file_path in self._nodes
