"""Graph module for file dependency and blast radius analysis using NetworkX."""

from .builder import GraphBuilder, build_dependency_graph
from .dependency_graph import DependencyGraph
from .import_resolver import CANDIDATE_SUFFIXES, ImportResolver, ResolvedImport, canonical_path
from .metrics import blast_radius, compute_metrics, get_all_dependents
from .models import GraphNode
from .queries import (
    find_import_paths,
    get_connected_components,
    get_file_dependencies,
    get_file_dependents,
    get_file_impact,
    get_top_risks,
    node_summary,
)
from .storage import GraphStorage

__all__ = [
    # Storage
    "GraphStorage",
    # Models
    "DependencyGraph",
    "GraphNode",
    # Builder
    "GraphBuilder",
    "build_dependency_graph",
    # Import Resolution
    "CANDIDATE_SUFFIXES",
    "ImportResolver",
    "ResolvedImport",
    "canonical_path",
    # Metrics
    "blast_radius",
    "compute_metrics",
    "get_all_dependents",
    # Queries
    "find_import_paths",
    "get_connected_components",
    "get_file_dependencies",
    "get_file_dependents",
    "get_file_impact",
    "get_top_risks",
    "node_summary",
]
